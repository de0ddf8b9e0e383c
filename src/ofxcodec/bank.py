"""Bank statement requests and responses (BANKMSGSRQV1 / BANKMSGSRSV1)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ofxcodec.aggregate import Aggregate, Message, element
from ofxcodec.common import Balance, BankAcct, CCAcct, Currency, Status
from ofxcodec.constants import (
    CheckSup,
    CorrectAction,
    ImageRefType,
    ImageType,
    Inv401kSource,
    MessageType,
    OfxVersion,
    TrnType,
)
from ofxcodec.errors import ValidityError
from ofxcodec.types import UID, Amount, Boolean, CurrSymbol, Date, Int, String

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from datetime import datetime
    from fractions import Fraction


@dataclass(slots=True)
class StatementRequest(Message):
    """Request for a bank account statement, STMTTRNRQ."""

    ELEMENT = 'STMTTRNRQ'
    MESSAGE_TYPE = MessageType.BANK_RQ

    trnuid: UID | None = element('TRNUID', UID)
    clt_cookie: str | None = element('CLTCOOKIE', String, optional=True)
    tan: str | None = element('TAN', String, optional=True)
    bank_acct_from: BankAcct | None = element('STMTRQ>BANKACCTFROM', BankAcct)
    dt_start: datetime | None = element('STMTRQ>INCTRAN>DTSTART', Date, optional=True)
    dt_end: datetime | None = element('STMTRQ>INCTRAN>DTEND', Date, optional=True)
    include: bool = element('STMTRQ>INCTRAN>INCLUDE', Boolean, default=False)
    include_pending: bool | None = element('STMTRQ>INCLUDEPENDING', Boolean, optional=True)
    inc_tran_img: bool | None = element('STMTRQ>INCTRANIMG', Boolean, optional=True)

    def validate(self, version: OfxVersion) -> None:
        Message.validate(self, version)
        if self.bank_acct_from is None:
            raise ValidityError('STMTRQ>BANKACCTFROM is required')
        self.bank_acct_from.validate()
        if self.include_pending and version < OfxVersion.V220:
            raise ValidityError('STMTRQ>INCLUDEPENDING requires OFX version 220 or later')
        if self.inc_tran_img and version < OfxVersion.V210:
            raise ValidityError('STMTRQ>INCTRANIMG requires OFX version 210 or later')


@dataclass(slots=True)
class Payee(Aggregate):
    """Full payee details, used instead of a plain NAME."""

    name: str | None = element('NAME', String)
    addr1: str | None = element('ADDR1', String)
    addr2: str | None = element('ADDR2', String, optional=True)
    addr3: str | None = element('ADDR3', String, optional=True)
    city: str | None = element('CITY', String)
    state: str | None = element('STATE', String)
    postal_code: str | None = element('POSTALCODE', String)
    country: str | None = element('COUNTRY', String, optional=True)
    phone: str | None = element('PHONE', String)

    def validate(self) -> None:
        for name in ('name', 'addr1', 'city', 'state', 'postal_code', 'phone'):
            if not getattr(self, name):
                raise ValidityError(f'Payee.{name} empty')


@dataclass(slots=True)
class ImageData(Aggregate):
    """Reference to a statement or check image."""

    image_type: ImageType | None = element('IMAGETYPE', ImageType)
    image_ref: str | None = element('IMAGEREF', String)
    image_ref_type: ImageRefType | None = element('IMAGEREFTYPE', ImageRefType)
    image_delay: int | None = element('IMAGEDELAY', Int, optional=True)
    dt_image_avail: datetime | None = element('DTIMAGEAVAIL', Date, optional=True)
    image_ttl: int | None = element('IMAGETTL', Int, optional=True)
    check_sup: CheckSup | None = element('CHECKSUP', CheckSup, optional=True)


@dataclass(slots=True)
class Transaction(Aggregate):
    """Posted bank or credit card transaction, STMTTRN."""

    trn_type: TrnType | None = element('TRNTYPE', TrnType)
    dt_posted: datetime | None = element('DTPOSTED', Date)
    dt_user: datetime | None = element('DTUSER', Date, optional=True)
    dt_avail: datetime | None = element('DTAVAIL', Date, optional=True)
    trn_amt: Fraction | None = element('TRNAMT', Amount)
    fitid: str | None = element('FITID', String)
    correct_fitid: str | None = element('CORRECTFITID', String, optional=True)
    correct_action: CorrectAction | None = element('CORRECTACTION', CorrectAction, optional=True)
    srvr_tid: str | None = element('SRVRTID', String, optional=True)
    check_num: str | None = element('CHECKNUM', String, optional=True)
    ref_num: str | None = element('REFNUM', String, optional=True)
    sic: int | None = element('SIC', Int, optional=True)
    payee_id: str | None = element('PAYEEID', String, optional=True)
    name: str | None = element('NAME', String, optional=True)
    payee: Payee | None = element('PAYEE', Payee, optional=True)
    extd_name: str | None = element('EXTDNAME', String, optional=True)
    bank_acct_to: BankAcct | None = element('BANKACCTTO', BankAcct, optional=True)
    cc_acct_to: CCAcct | None = element('CCACCTTO', CCAcct, optional=True)
    memo: str | None = element('MEMO', String, optional=True)
    image_data: list[ImageData] = element('IMAGEDATA', ImageData, many=True)
    currency: Currency | None = element('CURRENCY', Currency, optional=True)
    orig_currency: Currency | None = element('ORIGCURRENCY', Currency, optional=True)
    inv_401k_source: Inv401kSource | None = element('INV401KSOURCE', Inv401kSource, optional=True)

    def validate(self, version: OfxVersion) -> None:
        if self.trn_type is None or self.trn_type is TrnType.HOLD:
            raise ValidityError(f'invalid STMTTRN>TRNTYPE {self.trn_type!r}')
        if self.dt_posted is None:
            raise ValidityError('STMTTRN>DTPOSTED is required')
        if not self.fitid:
            raise ValidityError('STMTTRN>FITID is required')
        if self.name and self.payee is not None:
            raise ValidityError('STMTTRN may not contain both NAME and PAYEE')
        if self.payee is not None:
            self.payee.validate()
        if self.bank_acct_to is not None and self.cc_acct_to is not None:
            raise ValidityError('STMTTRN may not contain both BANKACCTTO and CCACCTTO')
        if self.image_data and version < OfxVersion.V220:
            raise ValidityError('STMTTRN>IMAGEDATA requires OFX version 220 or later')
        if len(self.image_data) > 2:
            raise ValidityError('STMTTRN may contain at most 2 IMAGEDATA elements')
        for currency in (self.currency, self.orig_currency):
            if currency is not None:
                currency.validate()


@dataclass(slots=True)
class TransactionList(Aggregate):
    """Posted transactions between two dates, BANKTRANLIST."""

    dt_start: datetime | None = element('DTSTART', Date)
    dt_end: datetime | None = element('DTEND', Date)
    transactions: list[Transaction] = element('STMTTRN', Transaction, many=True)


@dataclass(slots=True)
class PendingTransaction(Aggregate):
    """Transaction that has not posted yet, STMTTRNP."""

    trn_type: TrnType | None = element('TRNTYPE', TrnType)
    dt_tran: datetime | None = element('DTTRAN', Date)
    dt_expire: datetime | None = element('DTEXPIRE', Date, optional=True)
    trn_amt: Fraction | None = element('TRNAMT', Amount)
    ref_num: str | None = element('REFNUM', String, optional=True)
    name: str | None = element('NAME', String, optional=True)
    extd_name: str | None = element('EXTDNAME', String, optional=True)
    memo: str | None = element('MEMO', String, optional=True)
    image_data: list[ImageData] = element('IMAGEDATA', ImageData, many=True)
    currency: Currency | None = element('CURRENCY', Currency, optional=True)
    orig_currency: Currency | None = element('ORIGCURRENCY', Currency, optional=True)


@dataclass(slots=True)
class PendingTransactionList(Aggregate):
    """Pending transactions as of a date, BANKTRANLISTP."""

    dt_as_of: datetime | None = element('DTASOF', Date)
    transactions: list[PendingTransaction] = element('STMTTRNP', PendingTransaction, many=True)


@dataclass(slots=True)
class StatementResponse(Message):
    """Bank account statement, STMTTRNRS."""

    ELEMENT = 'STMTTRNRS'
    MESSAGE_TYPE = MessageType.BANK_RS

    trnuid: UID | None = element('TRNUID', UID)
    status: Status | None = element('STATUS', Status)
    clt_cookie: str | None = element('CLTCOOKIE', String, optional=True)
    cur_def: CurrSymbol | None = element('STMTRS>CURDEF', CurrSymbol, optional=True)
    bank_acct_from: BankAcct | None = element('STMTRS>BANKACCTFROM', BankAcct, optional=True)
    bank_tran_list: TransactionList | None = element('STMTRS>BANKTRANLIST', TransactionList, optional=True)
    bank_tran_list_p: PendingTransactionList | None = element(
        'STMTRS>BANKTRANLISTP', PendingTransactionList, optional=True
    )
    bal_amt: Fraction | None = element('STMTRS>LEDGERBAL>BALAMT', Amount, optional=True)
    dt_as_of: datetime | None = element('STMTRS>LEDGERBAL>DTASOF', Date, optional=True)
    avail_bal_amt: Fraction | None = element('STMTRS>AVAILBAL>BALAMT', Amount, optional=True)
    avail_dt_as_of: datetime | None = element('STMTRS>AVAILBAL>DTASOF', Date, optional=True)
    cash_adv_bal_amt: Fraction | None = element('STMTRS>CASHADVBALAMT', Amount, optional=True)
    int_rate: Fraction | None = element('STMTRS>INTRATE', Amount, optional=True)
    bal_list: list[Balance] = element('STMTRS>BALLIST>BAL', Balance, many=True)
    mktg_info: str | None = element('STMTRS>MKTGINFO', String, optional=True)

    def validate(self, version: OfxVersion) -> None:
        Message.validate(self, version)
        if self.cur_def is None and self.bank_acct_from is None and self.status.severity == 'ERROR':
            return
        if self.cur_def is None:
            raise ValidityError('STMTRS>CURDEF is required')
        CurrSymbol(self.cur_def).validate()
        if self.bank_acct_from is None:
            raise ValidityError('STMTRS>BANKACCTFROM is required')
        self.bank_acct_from.validate()
        if self.bal_amt is None or self.dt_as_of is None:
            raise ValidityError('STMTRS>LEDGERBAL requires BALAMT and DTASOF')
        if (self.avail_bal_amt is None) != (self.avail_dt_as_of is None):
            raise ValidityError('STMTRS>AVAILBAL requires both BALAMT and DTASOF')
        if self.bank_tran_list_p is not None and version < OfxVersion.V220:
            raise ValidityError('STMTRS>BANKTRANLISTP requires OFX version 220 or later')
        if self.bank_tran_list is not None:
            for transaction in self.bank_tran_list.transactions:
                transaction.validate(version)
        for balance in self.bal_list:
            balance.validate()
