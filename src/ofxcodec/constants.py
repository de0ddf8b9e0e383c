"""Protocol versions, message-set names and enumerated leaf vocabularies."""

from __future__ import annotations

from enum import Enum, IntEnum

from ofxcodec.errors import HeaderFormatError
from ofxcodec.types import OfxEnum


class OfxVersion(IntEnum):
    """Protocol versions. 1xx versions use SGML, 2xx versions use XML."""

    V102 = 102
    V103 = 103
    V151 = 151
    V160 = 160
    V200 = 200
    V201 = 201
    V202 = 202
    V203 = 203
    V210 = 210
    V211 = 211
    V220 = 220

    def __str__(self) -> str:
        return str(self.value)

    @property
    def is_sgml(self) -> bool:
        return self.value < 200

    @classmethod
    def from_string(cls, text: str) -> OfxVersion:
        try:
            return cls(int(text.strip()))
        except ValueError as exc:
            raise HeaderFormatError(f'unsupported OFX version: {text!r}') from exc


SGML_VERSIONS = tuple(version for version in OfxVersion if version.is_sgml)
XML_VERSIONS = tuple(version for version in OfxVersion if not version.is_sgml)


class MessageType(Enum):
    """Message-set wrapper elements, one request and one response flavour each."""

    SIGNON_RQ = 'SIGNONMSGSRQV1'
    SIGNUP_RQ = 'SIGNUPMSGSRQV1'
    BANK_RQ = 'BANKMSGSRQV1'
    CREDIT_CARD_RQ = 'CREDITCARDMSGSRQV1'
    LOAN_RQ = 'LOANMSGSRQV1'
    INV_STMT_RQ = 'INVSTMTMSGSRQV1'
    INTER_XFER_RQ = 'INTERXFERMSGSRQV1'
    WIRE_XFER_RQ = 'WIREXFERMSGSRQV1'
    BILLPAY_RQ = 'BILLPAYMSGSRQV1'
    EMAIL_RQ = 'EMAILMSGSRQV1'
    SEC_LIST_RQ = 'SECLISTMSGSRQV1'
    PRES_DIR_RQ = 'PRESDIRMSGSRQV1'
    PRES_DLV_RQ = 'PRESDLVMSGSRQV1'
    PROF_RQ = 'PROFMSGSRQV1'
    IMAGE_RQ = 'IMAGEMSGSRQV1'

    SIGNON_RS = 'SIGNONMSGSRSV1'
    SIGNUP_RS = 'SIGNUPMSGSRSV1'
    BANK_RS = 'BANKMSGSRSV1'
    CREDIT_CARD_RS = 'CREDITCARDMSGSRSV1'
    LOAN_RS = 'LOANMSGSRSV1'
    INV_STMT_RS = 'INVSTMTMSGSRSV1'
    INTER_XFER_RS = 'INTERXFERMSGSRSV1'
    WIRE_XFER_RS = 'WIREXFERMSGSRSV1'
    BILLPAY_RS = 'BILLPAYMSGSRSV1'
    EMAIL_RS = 'EMAILMSGSRSV1'
    SEC_LIST_RS = 'SECLISTMSGSRSV1'
    PRES_DIR_RS = 'PRESDIRMSGSRSV1'
    PRES_DLV_RS = 'PRESDLVMSGSRSV1'
    PROF_RS = 'PROFMSGSRSV1'
    IMAGE_RS = 'IMAGEMSGSRSV1'

    def __str__(self) -> str:
        return self.value


class AcctType(OfxEnum):
    CHECKING = 'CHECKING'
    SAVINGS = 'SAVINGS'
    MONEYMRKT = 'MONEYMRKT'
    CREDITLINE = 'CREDITLINE'
    CD = 'CD'


class TrnType(OfxEnum):
    CREDIT = 'CREDIT'
    DEBIT = 'DEBIT'
    INT = 'INT'
    DIV = 'DIV'
    FEE = 'FEE'
    SRVCHG = 'SRVCHG'
    DEP = 'DEP'
    ATM = 'ATM'
    POS = 'POS'
    XFER = 'XFER'
    CHECK = 'CHECK'
    PAYMENT = 'PAYMENT'
    CASH = 'CASH'
    DIRECTDEP = 'DIRECTDEP'
    DIRECTDEBIT = 'DIRECTDEBIT'
    REPEATPMT = 'REPEATPMT'
    HOLD = 'HOLD'
    OTHER = 'OTHER'


class CorrectAction(OfxEnum):
    DELETE = 'DELETE'
    REPLACE = 'REPLACE'


class BalType(OfxEnum):
    DOLLAR = 'DOLLAR'
    PERCENT = 'PERCENT'
    NUMBER = 'NUMBER'


class ImageType(OfxEnum):
    STATEMENT = 'STATEMENT'
    TRANSACTION = 'TRANSACTION'
    TAX = 'TAX'


class ImageRefType(OfxEnum):
    OPAQUE = 'OPAQUE'
    URL = 'URL'
    FORMURL = 'FORMURL'


class CheckSup(OfxEnum):
    FRONTONLY = 'FRONTONLY'
    BACKONLY = 'BACKONLY'
    FRONTANDBACK = 'FRONTANDBACK'


class Inv401kSource(OfxEnum):
    PRETAX = 'PRETAX'
    AFTERTAX = 'AFTERTAX'
    MATCH = 'MATCH'
    PROFITSHARING = 'PROFITSHARING'
    ROLLOVER = 'ROLLOVER'
    OTHERVEST = 'OTHERVEST'
    OTHERNONVEST = 'OTHERNONVEST'


class SubAcctType(OfxEnum):
    CASH = 'CASH'
    MARGIN = 'MARGIN'
    SHORT = 'SHORT'
    OTHER = 'OTHER'


class BuyType(OfxEnum):
    BUY = 'BUY'
    BUYTOCOVER = 'BUYTOCOVER'


class SellType(OfxEnum):
    SELL = 'SELL'
    SELLSHORT = 'SELLSHORT'


class SellReason(OfxEnum):
    CALL = 'CALL'
    SELL = 'SELL'
    MATURITY = 'MATURITY'


class OptAction(OfxEnum):
    EXERCISE = 'EXERCISE'
    ASSIGN = 'ASSIGN'
    EXPIRE = 'EXPIRE'


class OptBuyType(OfxEnum):
    BUYTOOPEN = 'BUYTOOPEN'
    BUYTOCLOSE = 'BUYTOCLOSE'


class OptSellType(OfxEnum):
    SELLTOCLOSE = 'SELLTOCLOSE'
    SELLTOOPEN = 'SELLTOOPEN'


class IncomeType(OfxEnum):
    CGLONG = 'CGLONG'
    CGSHORT = 'CGSHORT'
    DIV = 'DIV'
    INTEREST = 'INTEREST'
    MISC = 'MISC'


class TferAction(OfxEnum):
    IN = 'IN'
    OUT = 'OUT'


class PosType(OfxEnum):
    LONG = 'LONG'
    SHORT = 'SHORT'


class RelType(OfxEnum):
    SPREAD = 'SPREAD'
    STRADDLE = 'STRADDLE'
    NONE = 'NONE'
    OTHER = 'OTHER'


class Secured(OfxEnum):
    NAKED = 'NAKED'
    COVERED = 'COVERED'


class Duration(OfxEnum):
    DAY = 'DAY'
    GOODTILCANCEL = 'GOODTILCANCEL'
    IMMEDIATE = 'IMMEDIATE'


class Restriction(OfxEnum):
    ALLORNONE = 'ALLORNONE'
    MINUNITS = 'MINUNITS'
    NONE = 'NONE'


class UnitType(OfxEnum):
    SHARES = 'SHARES'
    CURRENCY = 'CURRENCY'


class DebtType(OfxEnum):
    COUPON = 'COUPON'
    ZERO = 'ZERO'


class DebtClass(OfxEnum):
    TREASURY = 'TREASURY'
    MUNICIPAL = 'MUNICIPAL'
    CORPORATE = 'CORPORATE'
    OTHER = 'OTHER'


class CouponFreq(OfxEnum):
    MONTHLY = 'MONTHLY'
    QUARTERLY = 'QUARTERLY'
    SEMIANNUAL = 'SEMIANNUAL'
    ANNUAL = 'ANNUAL'
    OTHER = 'OTHER'


class CallType(OfxEnum):
    CALL = 'CALL'
    PUT = 'PUT'
    PREFUND = 'PREFUND'
    MATURITY = 'MATURITY'


class AssetClass(OfxEnum):
    DOMESTICBOND = 'DOMESTICBOND'
    INTLBOND = 'INTLBOND'
    LARGESTOCK = 'LARGESTOCK'
    SMALLSTOCK = 'SMALLSTOCK'
    INTLSTOCK = 'INTLSTOCK'
    MONEYMRKT = 'MONEYMRKT'
    OTHER = 'OTHER'


class MfType(OfxEnum):
    OPENEND = 'OPENEND'
    CLOSEEND = 'CLOSEEND'
    OTHER = 'OTHER'


class OptType(OfxEnum):
    PUT = 'PUT'
    CALL = 'CALL'


class StockType(OfxEnum):
    COMMON = 'COMMON'
    PREFERRED = 'PREFERRED'
    CONVERTIBLE = 'CONVERTIBLE'
    OTHER = 'OTHER'


class SvcStatus(OfxEnum):
    AVAIL = 'AVAIL'
    PEND = 'PEND'
    ACTIVE = 'ACTIVE'
