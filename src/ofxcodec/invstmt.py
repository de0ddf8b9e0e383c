"""Investment statements (INVSTMTMSGSRQV1 / INVSTMTMSGSRSV1).

Transaction, position and open order lists hold several record shapes side
by side; their containers dispatch on the child element name and keep the
children in document order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from ofxcodec.aggregate import (
    Aggregate,
    Encoder,
    Message,
    Variant,
    child_elements,
    decode_leaf,
    decode_variant,
    element,
    write_variant,
)
from ofxcodec.bank import Transaction
from ofxcodec.common import Balance, Currency, InvAcct, Status
from ofxcodec.constants import (
    BuyType,
    Duration,
    IncomeType,
    Inv401kSource,
    MessageType,
    OptAction,
    OptBuyType,
    OptSellType,
    PosType,
    RelType,
    Restriction,
    Secured,
    SellReason,
    SellType,
    SubAcctType,
    TferAction,
    UnitType,
)
from ofxcodec.errors import ValidityError
from ofxcodec.seclist import SecurityID
from ofxcodec.types import UID, Amount, Boolean, CurrSymbol, Date, Int, String

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from datetime import datetime
    from fractions import Fraction
    from typing import Self

    from ofxcodec.tokens import StartElement, TokenReader


@dataclass(slots=True)
class InvStatementRequest(Message):
    """Request for an investment account statement, INVSTMTTRNRQ."""

    ELEMENT = 'INVSTMTTRNRQ'
    MESSAGE_TYPE = MessageType.INV_STMT_RQ

    trnuid: UID | None = element('TRNUID', UID)
    clt_cookie: str | None = element('CLTCOOKIE', String, optional=True)
    tan: str | None = element('TAN', String, optional=True)
    inv_acct_from: InvAcct | None = element('INVSTMTRQ>INVACCTFROM', InvAcct)
    dt_start: datetime | None = element('INVSTMTRQ>INCTRAN>DTSTART', Date, optional=True)
    dt_end: datetime | None = element('INVSTMTRQ>INCTRAN>DTEND', Date, optional=True)
    include: bool = element('INVSTMTRQ>INCTRAN>INCLUDE', Boolean, default=False)
    include_oo: bool = element('INVSTMTRQ>INCOO', Boolean, default=False)
    pos_dt_as_of: datetime | None = element('INVSTMTRQ>INCPOS>DTASOF', Date, optional=True)
    include_pos: bool = element('INVSTMTRQ>INCPOS>INCLUDE', Boolean, default=False)
    include_balance: bool = element('INVSTMTRQ>INCBAL', Boolean, default=False)
    include_401k: bool | None = element('INVSTMTRQ>INC401K', Boolean, optional=True)
    include_401k_bal: bool | None = element('INVSTMTRQ>INC401KBAL', Boolean, optional=True)
    include_tran_image: bool | None = element('INVSTMTRQ>INCTRANIMAGE', Boolean, optional=True)


@dataclass(slots=True)
class InvTran(Aggregate):
    """Identification and dates shared by investment transactions."""

    fitid: str | None = element('FITID', String)
    srvr_tid: str | None = element('SRVRTID', String, optional=True)
    dt_trade: datetime | None = element('DTTRADE', Date)
    dt_settle: datetime | None = element('DTSETTLE', Date, optional=True)
    reversal_fitid: str | None = element('REVERSALFITID', String, optional=True)
    memo: str | None = element('MEMO', String, optional=True)


@dataclass(slots=True)
class InvBuy(Aggregate):
    """Details common to every kind of purchase."""

    inv_tran: InvTran | None = element('INVTRAN', InvTran)
    sec_id: SecurityID | None = element('SECID', SecurityID)
    units: Fraction | None = element('UNITS', Amount)
    unit_price: Fraction | None = element('UNITPRICE', Amount)
    markup: Fraction | None = element('MARKUP', Amount, optional=True)
    commission: Fraction | None = element('COMMISSION', Amount, optional=True)
    taxes: Fraction | None = element('TAXES', Amount, optional=True)
    fees: Fraction | None = element('FEES', Amount, optional=True)
    load: Fraction | None = element('LOAD', Amount, optional=True)
    total: Fraction | None = element('TOTAL', Amount)
    currency: Currency | None = element('CURRENCY', Currency, optional=True)
    orig_currency: Currency | None = element('ORIGCURRENCY', Currency, optional=True)
    sub_acct_sec: SubAcctType | None = element('SUBACCTSEC', SubAcctType)
    sub_acct_fund: SubAcctType | None = element('SUBACCTFUND', SubAcctType)
    loan_id: str | None = element('LOANID', String, optional=True)
    loan_principal: Fraction | None = element('LOANPRINCIPAL', Amount, optional=True)
    loan_interest: Fraction | None = element('LOANINTEREST', Amount, optional=True)
    inv_401k_source: Inv401kSource | None = element('INV401KSOURCE', Inv401kSource, optional=True)
    dt_payroll: datetime | None = element('DTPAYROLL', Date, optional=True)
    prior_year_contrib: bool | None = element('PRIORYEARCONTRIB', Boolean, optional=True)


@dataclass(slots=True)
class InvSell(Aggregate):
    """Details common to every kind of sale."""

    inv_tran: InvTran | None = element('INVTRAN', InvTran)
    sec_id: SecurityID | None = element('SECID', SecurityID)
    units: Fraction | None = element('UNITS', Amount)
    unit_price: Fraction | None = element('UNITPRICE', Amount)
    markdown: Fraction | None = element('MARKDOWN', Amount, optional=True)
    commission: Fraction | None = element('COMMISSION', Amount, optional=True)
    taxes: Fraction | None = element('TAXES', Amount, optional=True)
    fees: Fraction | None = element('FEES', Amount, optional=True)
    load: Fraction | None = element('LOAD', Amount, optional=True)
    withholding: Fraction | None = element('WITHHOLDING', Amount, optional=True)
    tax_exempt: bool | None = element('TAXEXEMPT', Boolean, optional=True)
    total: Fraction | None = element('TOTAL', Amount)
    gain: Fraction | None = element('GAIN', Amount, optional=True)
    currency: Currency | None = element('CURRENCY', Currency, optional=True)
    orig_currency: Currency | None = element('ORIGCURRENCY', Currency, optional=True)
    sub_acct_sec: SubAcctType | None = element('SUBACCTSEC', SubAcctType)
    sub_acct_fund: SubAcctType | None = element('SUBACCTFUND', SubAcctType)
    loan_id: str | None = element('LOANID', String, optional=True)
    state_withholding: Fraction | None = element('STATEWITHHOLDING', Amount, optional=True)
    penalty: Fraction | None = element('PENALTY', Amount, optional=True)
    inv_401k_source: Inv401kSource | None = element('INV401KSOURCE', Inv401kSource, optional=True)


@dataclass(slots=True)
class BuyDebt(Variant):
    ELEMENT = 'BUYDEBT'

    inv_buy: InvBuy | None = element('INVBUY', InvBuy)
    accrd_int: Fraction | None = element('ACCRDINT', Amount, optional=True)


@dataclass(slots=True)
class BuyMF(Variant):
    ELEMENT = 'BUYMF'

    inv_buy: InvBuy | None = element('INVBUY', InvBuy)
    buy_type: BuyType | None = element('BUYTYPE', BuyType)
    rel_fitid: str | None = element('RELFITID', String, optional=True)


@dataclass(slots=True)
class BuyOpt(Variant):
    ELEMENT = 'BUYOPT'

    inv_buy: InvBuy | None = element('INVBUY', InvBuy)
    opt_buy_type: OptBuyType | None = element('OPTBUYTYPE', OptBuyType)
    sh_per_ctrct: int | None = element('SHPERCTRCT', Int)


@dataclass(slots=True)
class BuyOther(Variant):
    ELEMENT = 'BUYOTHER'

    inv_buy: InvBuy | None = element('INVBUY', InvBuy)


@dataclass(slots=True)
class BuyStock(Variant):
    ELEMENT = 'BUYSTOCK'

    inv_buy: InvBuy | None = element('INVBUY', InvBuy)
    buy_type: BuyType | None = element('BUYTYPE', BuyType)


@dataclass(slots=True)
class ClosureOpt(Variant):
    """Exercise, assignment or expiration of an option."""

    ELEMENT = 'CLOSUREOPT'

    inv_tran: InvTran | None = element('INVTRAN', InvTran)
    sec_id: SecurityID | None = element('SECID', SecurityID)
    opt_action: OptAction | None = element('OPTACTION', OptAction)
    units: Fraction | None = element('UNITS', Amount)
    sh_per_ctrct: int | None = element('SHPERCTRCT', Int)
    sub_acct_sec: SubAcctType | None = element('SUBACCTSEC', SubAcctType)
    rel_fitid: str | None = element('RELFITID', String, optional=True)
    gain: Fraction | None = element('GAIN', Amount, optional=True)


@dataclass(slots=True)
class Income(Variant):
    """Dividend, interest or capital gains distribution."""

    ELEMENT = 'INCOME'

    inv_tran: InvTran | None = element('INVTRAN', InvTran)
    sec_id: SecurityID | None = element('SECID', SecurityID)
    income_type: IncomeType | None = element('INCOMETYPE', IncomeType)
    total: Fraction | None = element('TOTAL', Amount)
    sub_acct_sec: SubAcctType | None = element('SUBACCTSEC', SubAcctType)
    sub_acct_fund: SubAcctType | None = element('SUBACCTFUND', SubAcctType)
    tax_exempt: bool | None = element('TAXEXEMPT', Boolean, optional=True)
    withholding: Fraction | None = element('WITHHOLDING', Amount, optional=True)
    currency: Currency | None = element('CURRENCY', Currency, optional=True)
    orig_currency: Currency | None = element('ORIGCURRENCY', Currency, optional=True)
    inv_401k_source: Inv401kSource | None = element('INV401KSOURCE', Inv401kSource, optional=True)


@dataclass(slots=True)
class InvExpense(Variant):
    ELEMENT = 'INVEXPENSE'

    inv_tran: InvTran | None = element('INVTRAN', InvTran)
    sec_id: SecurityID | None = element('SECID', SecurityID)
    total: Fraction | None = element('TOTAL', Amount)
    sub_acct_sec: SubAcctType | None = element('SUBACCTSEC', SubAcctType)
    sub_acct_fund: SubAcctType | None = element('SUBACCTFUND', SubAcctType)
    currency: Currency | None = element('CURRENCY', Currency, optional=True)
    orig_currency: Currency | None = element('ORIGCURRENCY', Currency, optional=True)
    inv_401k_source: Inv401kSource | None = element('INV401KSOURCE', Inv401kSource, optional=True)


@dataclass(slots=True)
class JrnlFund(Variant):
    """Cash moved between sub-accounts."""

    ELEMENT = 'JRNLFUND'

    inv_tran: InvTran | None = element('INVTRAN', InvTran)
    total: Fraction | None = element('TOTAL', Amount)
    sub_acct_from: SubAcctType | None = element('SUBACCTFROM', SubAcctType)
    sub_acct_to: SubAcctType | None = element('SUBACCTTO', SubAcctType)


@dataclass(slots=True)
class JrnlSec(Variant):
    """Securities moved between sub-accounts."""

    ELEMENT = 'JRNLSEC'

    inv_tran: InvTran | None = element('INVTRAN', InvTran)
    sec_id: SecurityID | None = element('SECID', SecurityID)
    sub_acct_from: SubAcctType | None = element('SUBACCTFROM', SubAcctType)
    sub_acct_to: SubAcctType | None = element('SUBACCTTO', SubAcctType)
    units: Fraction | None = element('UNITS', Amount)


@dataclass(slots=True)
class MarginInterest(Variant):
    ELEMENT = 'MARGININTEREST'

    inv_tran: InvTran | None = element('INVTRAN', InvTran)
    total: Fraction | None = element('TOTAL', Amount)
    sub_acct_fund: SubAcctType | None = element('SUBACCTFUND', SubAcctType)
    currency: Currency | None = element('CURRENCY', Currency, optional=True)
    orig_currency: Currency | None = element('ORIGCURRENCY', Currency, optional=True)


@dataclass(slots=True)
class Reinvest(Variant):
    ELEMENT = 'REINVEST'

    inv_tran: InvTran | None = element('INVTRAN', InvTran)
    sec_id: SecurityID | None = element('SECID', SecurityID)
    income_type: IncomeType | None = element('INCOMETYPE', IncomeType)
    total: Fraction | None = element('TOTAL', Amount)
    sub_acct_sec: SubAcctType | None = element('SUBACCTSEC', SubAcctType)
    units: Fraction | None = element('UNITS', Amount)
    unit_price: Fraction | None = element('UNITPRICE', Amount)
    commission: Fraction | None = element('COMMISSION', Amount, optional=True)
    taxes: Fraction | None = element('TAXES', Amount, optional=True)
    fees: Fraction | None = element('FEES', Amount, optional=True)
    load: Fraction | None = element('LOAD', Amount, optional=True)
    tax_exempt: bool | None = element('TAXEXEMPT', Boolean, optional=True)
    currency: Currency | None = element('CURRENCY', Currency, optional=True)
    orig_currency: Currency | None = element('ORIGCURRENCY', Currency, optional=True)
    inv_401k_source: Inv401kSource | None = element('INV401KSOURCE', Inv401kSource, optional=True)


@dataclass(slots=True)
class RetOfCap(Variant):
    ELEMENT = 'RETOFCAP'

    inv_tran: InvTran | None = element('INVTRAN', InvTran)
    sec_id: SecurityID | None = element('SECID', SecurityID)
    total: Fraction | None = element('TOTAL', Amount)
    sub_acct_sec: SubAcctType | None = element('SUBACCTSEC', SubAcctType)
    sub_acct_fund: SubAcctType | None = element('SUBACCTFUND', SubAcctType)
    currency: Currency | None = element('CURRENCY', Currency, optional=True)
    orig_currency: Currency | None = element('ORIGCURRENCY', Currency, optional=True)
    inv_401k_source: Inv401kSource | None = element('INV401KSOURCE', Inv401kSource, optional=True)


@dataclass(slots=True)
class SellDebt(Variant):
    ELEMENT = 'SELLDEBT'

    inv_sell: InvSell | None = element('INVSELL', InvSell)
    sell_reason: SellReason | None = element('SELLREASON', SellReason)
    accrd_int: Fraction | None = element('ACCRDINT', Amount, optional=True)


@dataclass(slots=True)
class SellMF(Variant):
    ELEMENT = 'SELLMF'

    inv_sell: InvSell | None = element('INVSELL', InvSell)
    sell_type: SellType | None = element('SELLTYPE', SellType)
    avg_cost_basis: Fraction | None = element('AVGCOSTBASIS', Amount, optional=True)
    rel_fitid: str | None = element('RELFITID', String, optional=True)


@dataclass(slots=True)
class SellOpt(Variant):
    ELEMENT = 'SELLOPT'

    inv_sell: InvSell | None = element('INVSELL', InvSell)
    opt_sell_type: OptSellType | None = element('OPTSELLTYPE', OptSellType)
    sh_per_ctrct: int | None = element('SHPERCTRCT', Int)
    rel_fitid: str | None = element('RELFITID', String, optional=True)
    rel_type: RelType | None = element('RELTYPE', RelType, optional=True)
    secured: Secured | None = element('SECURED', Secured, optional=True)


@dataclass(slots=True)
class SellOther(Variant):
    ELEMENT = 'SELLOTHER'

    inv_sell: InvSell | None = element('INVSELL', InvSell)


@dataclass(slots=True)
class SellStock(Variant):
    ELEMENT = 'SELLSTOCK'

    inv_sell: InvSell | None = element('INVSELL', InvSell)
    sell_type: SellType | None = element('SELLTYPE', SellType)


@dataclass(slots=True)
class Split(Variant):
    ELEMENT = 'SPLIT'

    inv_tran: InvTran | None = element('INVTRAN', InvTran)
    sec_id: SecurityID | None = element('SECID', SecurityID)
    sub_acct_sec: SubAcctType | None = element('SUBACCTSEC', SubAcctType)
    old_units: Fraction | None = element('OLDUNITS', Amount)
    new_units: Fraction | None = element('NEWUNITS', Amount)
    numerator: int | None = element('NUMERATOR', Int)
    denominator: int | None = element('DENOMINATOR', Int)
    currency: Currency | None = element('CURRENCY', Currency, optional=True)
    orig_currency: Currency | None = element('ORIGCURRENCY', Currency, optional=True)
    frac_cash: Fraction | None = element('FRACCASH', Amount, optional=True)
    sub_acct_fund: SubAcctType | None = element('SUBACCTFUND', SubAcctType, optional=True)
    inv_401k_source: Inv401kSource | None = element('INV401KSOURCE', Inv401kSource, optional=True)


@dataclass(slots=True)
class Transfer(Variant):
    """Securities moved into or out of the account."""

    ELEMENT = 'TRANSFER'

    inv_tran: InvTran | None = element('INVTRAN', InvTran)
    sec_id: SecurityID | None = element('SECID', SecurityID)
    sub_acct_sec: SubAcctType | None = element('SUBACCTSEC', SubAcctType)
    units: Fraction | None = element('UNITS', Amount)
    tfer_action: TferAction | None = element('TFERACTION', TferAction)
    pos_type: PosType | None = element('POSTYPE', PosType)
    inv_acct_from: InvAcct | None = element('INVACCTFROM', InvAcct, optional=True)
    avg_cost_basis: Fraction | None = element('AVGCOSTBASIS', Amount, optional=True)
    unit_price: Fraction | None = element('UNITPRICE', Amount, optional=True)
    dt_purchase: datetime | None = element('DTPURCHASE', Date, optional=True)
    inv_401k_source: Inv401kSource | None = element('INV401KSOURCE', Inv401kSource, optional=True)


@dataclass(slots=True)
class InvBankTransaction(Aggregate):
    """Cash transactions in the investment account, INVBANKTRAN."""

    transactions: list[Transaction] = element('STMTTRN', Transaction, many=True)
    sub_acct_fund: SubAcctType | None = element('SUBACCTFUND', SubAcctType)


INV_TRANSACTIONS = MappingProxyType(
    {
        cls.ELEMENT: cls
        for cls in (
            BuyDebt,
            BuyMF,
            BuyOpt,
            BuyOther,
            BuyStock,
            ClosureOpt,
            Income,
            InvExpense,
            JrnlFund,
            JrnlSec,
            MarginInterest,
            Reinvest,
            RetOfCap,
            SellDebt,
            SellMF,
            SellOpt,
            SellOther,
            SellStock,
            Split,
            Transfer,
        )
    }
)


@dataclass(slots=True)
class InvTranList(Aggregate):
    """Investment and cash transactions between two dates, INVTRANLIST.

    Investment transactions and INVBANKTRAN elements are kept in separate
    lists; each list keeps document order. Encoding writes the investment
    transactions first.
    """

    VARIANTS = INV_TRANSACTIONS

    dt_start: datetime | None = element('DTSTART', Date)
    dt_end: datetime | None = element('DTEND', Date)
    inv_transactions: list[Variant] = field(default_factory=list)
    bank_transactions: list[InvBankTransaction] = element('INVBANKTRAN', InvBankTransaction, many=True)

    @classmethod
    def from_element(cls, reader: TokenReader, start: StartElement) -> Self:
        result = cls()
        for child in child_elements(reader, start):
            if child.name == 'DTSTART':
                result.dt_start = decode_leaf(reader, child, Date)
            elif child.name == 'DTEND':
                result.dt_end = decode_leaf(reader, child, Date)
            elif child.name == 'INVBANKTRAN':
                result.bank_transactions.append(InvBankTransaction.from_element(reader, child))
            else:
                result.inv_transactions.append(decode_variant(reader, child, cls.VARIANTS, start.name))
        return result

    def write_element(self, encoder: Encoder, name: str) -> None:
        if self.dt_start is None or self.dt_end is None:
            raise ValidityError(f'{name} requires DTSTART and DTEND')
        encoder.start(name)
        encoder.leaf('DTSTART', Date.to_text(self.dt_start))
        encoder.leaf('DTEND', Date.to_text(self.dt_end))
        for transaction in self.inv_transactions:
            write_variant(encoder, transaction, self.VARIANTS, name)
        for bank_transaction in self.bank_transactions:
            bank_transaction.write_element(encoder, 'INVBANKTRAN')
        encoder.end(name)


@dataclass(slots=True)
class InvPosition(Aggregate):
    """Holding details shared by every kind of position."""

    sec_id: SecurityID | None = element('SECID', SecurityID)
    held_in_acct: SubAcctType | None = element('HELDINACCT', SubAcctType)
    pos_type: PosType | None = element('POSTYPE', PosType)
    units: Fraction | None = element('UNITS', Amount)
    unit_price: Fraction | None = element('UNITPRICE', Amount)
    mkt_val: Fraction | None = element('MKTVAL', Amount)
    avg_cost_basis: Fraction | None = element('AVGCOSTBASIS', Amount, optional=True)
    dt_price_as_of: datetime | None = element('DTPRICEASOF', Date)
    currency: Currency | None = element('CURRENCY', Currency, optional=True)
    memo: str | None = element('MEMO', String, optional=True)
    inv_401k_source: Inv401kSource | None = element('INV401KSOURCE', Inv401kSource, optional=True)


@dataclass(slots=True)
class PosDebt(Variant):
    ELEMENT = 'POSDEBT'

    inv_pos: InvPosition | None = element('INVPOS', InvPosition)


@dataclass(slots=True)
class PosMF(Variant):
    ELEMENT = 'POSMF'

    inv_pos: InvPosition | None = element('INVPOS', InvPosition)
    units_street: Fraction | None = element('UNITSSTREET', Amount, optional=True)
    units_user: Fraction | None = element('UNITSUSER', Amount, optional=True)
    reinv_div: bool | None = element('REINVDIV', Boolean, optional=True)
    reinv_cg: bool | None = element('REINVCG', Boolean, optional=True)


@dataclass(slots=True)
class PosOpt(Variant):
    ELEMENT = 'POSOPT'

    inv_pos: InvPosition | None = element('INVPOS', InvPosition)
    secured: Secured | None = element('SECURED', Secured, optional=True)


@dataclass(slots=True)
class PosOther(Variant):
    ELEMENT = 'POSOTHER'

    inv_pos: InvPosition | None = element('INVPOS', InvPosition)


@dataclass(slots=True)
class PosStock(Variant):
    ELEMENT = 'POSSTOCK'

    inv_pos: InvPosition | None = element('INVPOS', InvPosition)
    units_street: Fraction | None = element('UNITSSTREET', Amount, optional=True)
    units_user: Fraction | None = element('UNITSUSER', Amount, optional=True)
    reinv_div: bool | None = element('REINVDIV', Boolean, optional=True)


@dataclass(slots=True)
class PositionList(Aggregate):
    """Holdings of the account, INVPOSLIST."""

    VARIANTS = MappingProxyType({cls.ELEMENT: cls for cls in (PosDebt, PosMF, PosOpt, PosOther, PosStock)})

    positions: list[Variant] = field(default_factory=list)

    @classmethod
    def from_element(cls, reader: TokenReader, start: StartElement) -> Self:
        positions = [decode_variant(reader, child, cls.VARIANTS, start.name) for child in child_elements(reader, start)]
        return cls(positions)

    def write_element(self, encoder: Encoder, name: str) -> None:
        encoder.start(name)
        for position in self.positions:
            write_variant(encoder, position, self.VARIANTS, name)
        encoder.end(name)


@dataclass(slots=True)
class InvBalance(Aggregate):
    """Cash balances of the investment account, INVBAL."""

    avail_cash: Fraction | None = element('AVAILCASH', Amount)
    margin_balance: Fraction | None = element('MARGINBALANCE', Amount)
    short_balance: Fraction | None = element('SHORTBALANCE', Amount)
    buy_power: Fraction | None = element('BUYPOWER', Amount, optional=True)
    bal_list: list[Balance] = element('BALLIST>BAL', Balance, many=True)


@dataclass(slots=True)
class OO(Aggregate):
    """Order details shared by every kind of open order."""

    fitid: str | None = element('FITID', String)
    srvr_tid: str | None = element('SRVRTID', String, optional=True)
    sec_id: SecurityID | None = element('SECID', SecurityID)
    dt_placed: datetime | None = element('DTPLACED', Date)
    units: Fraction | None = element('UNITS', Amount)
    sub_acct: SubAcctType | None = element('SUBACCT', SubAcctType)
    duration: Duration | None = element('DURATION', Duration)
    restriction: Restriction | None = element('RESTRICTION', Restriction)
    min_units: Fraction | None = element('MINUNITS', Amount, optional=True)
    limit_price: Fraction | None = element('LIMITPRICE', Amount, optional=True)
    stop_price: Fraction | None = element('STOPPRICE', Amount, optional=True)
    memo: str | None = element('MEMO', String, optional=True)
    currency: Currency | None = element('CURRENCY', Currency, optional=True)
    inv_401k_source: Inv401kSource | None = element('INV401KSOURCE', Inv401kSource, optional=True)


@dataclass(slots=True)
class OOBuyDebt(Variant):
    ELEMENT = 'OOBUYDEBT'

    oo: OO | None = element('OO', OO)
    auction: bool | None = element('AUCTION', Boolean)
    dt_auction: datetime | None = element('DTAUCTION', Date, optional=True)


@dataclass(slots=True)
class OOBuyMF(Variant):
    ELEMENT = 'OOBUYMF'

    oo: OO | None = element('OO', OO)
    buy_type: BuyType | None = element('BUYTYPE', BuyType)
    unit_type: UnitType | None = element('UNITTYPE', UnitType)


@dataclass(slots=True)
class OOBuyOpt(Variant):
    ELEMENT = 'OOBUYOPT'

    oo: OO | None = element('OO', OO)
    opt_buy_type: OptBuyType | None = element('OPTBUYTYPE', OptBuyType)


@dataclass(slots=True)
class OOBuyOther(Variant):
    ELEMENT = 'OOBUYOTHER'

    oo: OO | None = element('OO', OO)
    unit_type: UnitType | None = element('UNITTYPE', UnitType)


@dataclass(slots=True)
class OOBuyStock(Variant):
    ELEMENT = 'OOBUYSTOCK'

    oo: OO | None = element('OO', OO)
    buy_type: BuyType | None = element('BUYTYPE', BuyType)


@dataclass(slots=True)
class OOSellDebt(Variant):
    ELEMENT = 'OOSELLDEBT'

    oo: OO | None = element('OO', OO)


@dataclass(slots=True)
class OOSellMF(Variant):
    ELEMENT = 'OOSELLMF'

    oo: OO | None = element('OO', OO)
    sell_type: SellType | None = element('SELLTYPE', SellType)
    unit_type: UnitType | None = element('UNITTYPE', UnitType)
    sell_all: bool | None = element('SELLALL', Boolean)


@dataclass(slots=True)
class OOSellOpt(Variant):
    ELEMENT = 'OOSELLOPT'

    oo: OO | None = element('OO', OO)
    opt_sell_type: OptSellType | None = element('OPTSELLTYPE', OptSellType)


@dataclass(slots=True)
class OOSellOther(Variant):
    ELEMENT = 'OOSELLOTHER'

    oo: OO | None = element('OO', OO)
    unit_type: UnitType | None = element('UNITTYPE', UnitType)


@dataclass(slots=True)
class OOSellStock(Variant):
    ELEMENT = 'OOSELLSTOCK'

    oo: OO | None = element('OO', OO)
    sell_type: SellType | None = element('SELLTYPE', SellType)


@dataclass(slots=True)
class SwitchMF(Variant):
    """Order to move holdings from one mutual fund to another."""

    ELEMENT = 'SWITCHMF'

    oo: OO | None = element('OO', OO)
    sec_id: SecurityID | None = element('SECID', SecurityID)
    unit_type: UnitType | None = element('UNITTYPE', UnitType)
    switch_all: bool | None = element('SWITCHALL', Boolean)


@dataclass(slots=True)
class OOList(Aggregate):
    """Open orders of the account, INVOOLIST."""

    VARIANTS = MappingProxyType(
        {
            cls.ELEMENT: cls
            for cls in (
                OOBuyDebt,
                OOBuyMF,
                OOBuyOpt,
                OOBuyOther,
                OOBuyStock,
                OOSellDebt,
                OOSellMF,
                OOSellOpt,
                OOSellOther,
                OOSellStock,
                SwitchMF,
            )
        }
    )

    orders: list[Variant] = field(default_factory=list)

    @classmethod
    def from_element(cls, reader: TokenReader, start: StartElement) -> Self:
        orders = [decode_variant(reader, child, cls.VARIANTS, start.name) for child in child_elements(reader, start)]
        return cls(orders)

    def write_element(self, encoder: Encoder, name: str) -> None:
        encoder.start(name)
        for order in self.orders:
            write_variant(encoder, order, self.VARIANTS, name)
        encoder.end(name)


@dataclass(slots=True)
class InvStatementResponse(Message):
    """Investment account statement, INVSTMTTRNRS."""

    ELEMENT = 'INVSTMTTRNRS'
    MESSAGE_TYPE = MessageType.INV_STMT_RS

    trnuid: UID | None = element('TRNUID', UID)
    status: Status | None = element('STATUS', Status)
    clt_cookie: str | None = element('CLTCOOKIE', String, optional=True)
    dt_as_of: datetime | None = element('INVSTMTRS>DTASOF', Date, optional=True)
    cur_def: CurrSymbol | None = element('INVSTMTRS>CURDEF', CurrSymbol, optional=True)
    inv_acct_from: InvAcct | None = element('INVSTMTRS>INVACCTFROM', InvAcct, optional=True)
    inv_tran_list: InvTranList | None = element('INVSTMTRS>INVTRANLIST', InvTranList, optional=True)
    inv_pos_list: PositionList | None = element('INVSTMTRS>INVPOSLIST', PositionList, optional=True)
    inv_bal: InvBalance | None = element('INVSTMTRS>INVBAL', InvBalance, optional=True)
    inv_oo_list: OOList | None = element('INVSTMTRS>INVOOLIST', OOList, optional=True)
    mktg_info: str | None = element('INVSTMTRS>MKTGINFO', String, optional=True)
