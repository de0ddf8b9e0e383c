"""Credit card statements (CREDITCARDMSGSRQV1 / CREDITCARDMSGSRSV1)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ofxcodec.aggregate import Message, element
from ofxcodec.bank import TransactionList
from ofxcodec.common import Balance, CCAcct, Status
from ofxcodec.constants import MessageType, OfxVersion
from ofxcodec.errors import ValidityError
from ofxcodec.types import UID, Amount, Boolean, CurrSymbol, Date, String

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from datetime import datetime
    from fractions import Fraction


@dataclass(slots=True)
class CCStatementRequest(Message):
    ELEMENT = 'CCSTMTTRNRQ'
    MESSAGE_TYPE = MessageType.CREDIT_CARD_RQ

    trnuid: UID | None = element('TRNUID', UID)
    clt_cookie: str | None = element('CLTCOOKIE', String, optional=True)
    tan: str | None = element('TAN', String, optional=True)
    cc_acct_from: CCAcct | None = element('CCSTMTRQ>CCACCTFROM', CCAcct)
    dt_start: datetime | None = element('CCSTMTRQ>INCTRAN>DTSTART', Date, optional=True)
    dt_end: datetime | None = element('CCSTMTRQ>INCTRAN>DTEND', Date, optional=True)
    include: bool = element('CCSTMTRQ>INCTRAN>INCLUDE', Boolean, default=False)
    include_pending: bool | None = element('CCSTMTRQ>INCLUDEPENDING', Boolean, optional=True)
    inc_tran_img: bool | None = element('CCSTMTRQ>INCTRANIMG', Boolean, optional=True)

    def validate(self, version: OfxVersion) -> None:
        Message.validate(self, version)
        if self.cc_acct_from is None:
            raise ValidityError('CCSTMTRQ>CCACCTFROM is required')
        self.cc_acct_from.validate()
        if self.include_pending and version < OfxVersion.V220:
            raise ValidityError('CCSTMTRQ>INCLUDEPENDING requires OFX version 220 or later')
        if self.inc_tran_img and version < OfxVersion.V210:
            raise ValidityError('CCSTMTRQ>INCTRANIMG requires OFX version 210 or later')


@dataclass(slots=True)
class CCStatementResponse(Message):
    ELEMENT = 'CCSTMTTRNRS'
    MESSAGE_TYPE = MessageType.CREDIT_CARD_RS

    trnuid: UID | None = element('TRNUID', UID)
    status: Status | None = element('STATUS', Status)
    clt_cookie: str | None = element('CLTCOOKIE', String, optional=True)
    cur_def: CurrSymbol | None = element('CCSTMTRS>CURDEF', CurrSymbol, optional=True)
    cc_acct_from: CCAcct | None = element('CCSTMTRS>CCACCTFROM', CCAcct, optional=True)
    bank_tran_list: TransactionList | None = element('CCSTMTRS>BANKTRANLIST', TransactionList, optional=True)
    bal_amt: Fraction | None = element('CCSTMTRS>LEDGERBAL>BALAMT', Amount, optional=True)
    dt_as_of: datetime | None = element('CCSTMTRS>LEDGERBAL>DTASOF', Date, optional=True)
    avail_bal_amt: Fraction | None = element('CCSTMTRS>AVAILBAL>BALAMT', Amount, optional=True)
    avail_dt_as_of: datetime | None = element('CCSTMTRS>AVAILBAL>DTASOF', Date, optional=True)
    cash_adv_bal_amt: Fraction | None = element('CCSTMTRS>CASHADVBALAMT', Amount, optional=True)
    int_rate_purch: Fraction | None = element('CCSTMTRS>INTRATEPURCH', Amount, optional=True)
    int_rate_cash: Fraction | None = element('CCSTMTRS>INTRATECASH', Amount, optional=True)
    int_rate_xfer: Fraction | None = element('CCSTMTRS>INTRATEXFER', Amount, optional=True)
    reward_name: str | None = element('CCSTMTRS>REWARDINFO>NAME', String, optional=True)
    reward_bal: Fraction | None = element('CCSTMTRS>REWARDINFO>REWARDBAL', Amount, optional=True)
    reward_earned: Fraction | None = element('CCSTMTRS>REWARDINFO>REWARDEARNED', Amount, optional=True)
    bal_list: list[Balance] = element('CCSTMTRS>BALLIST>BAL', Balance, many=True)
    mktg_info: str | None = element('CCSTMTRS>MKTGINFO', String, optional=True)

    def validate(self, version: OfxVersion) -> None:
        Message.validate(self, version)
        if self.cur_def is None and self.cc_acct_from is None and self.status.severity == 'ERROR':
            return
        if self.cur_def is None:
            raise ValidityError('CCSTMTRS>CURDEF is required')
        CurrSymbol(self.cur_def).validate()
        if self.cc_acct_from is None:
            raise ValidityError('CCSTMTRS>CCACCTFROM is required')
        self.cc_acct_from.validate()
        if (self.avail_bal_amt is None) != (self.avail_dt_as_of is None):
            raise ValidityError('CCSTMTRS>AVAILBAL requires both BALAMT and DTASOF')
        if self.bank_tran_list is not None:
            for transaction in self.bank_tran_list.transactions:
                transaction.validate(version)
        for balance in self.bal_list:
            balance.validate()
