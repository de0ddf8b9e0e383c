"""Account information requests and responses (SIGNUPMSGSRQV1 / SIGNUPMSGSRSV1)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ofxcodec.aggregate import Aggregate, Message, element
from ofxcodec.common import BankAcct, CCAcct, InvAcct, Status
from ofxcodec.constants import MessageType, SvcStatus
from ofxcodec.errors import ValidityError
from ofxcodec.types import UID, Amount, Boolean, Date, String

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from datetime import datetime
    from fractions import Fraction

    from ofxcodec.constants import OfxVersion


@dataclass(slots=True)
class AcctInfoRequest(Message):
    """Request for the list of accounts updated since ``dt_acct_up``."""

    ELEMENT = 'ACCTINFOTRNRQ'
    MESSAGE_TYPE = MessageType.SIGNUP_RQ

    trnuid: UID | None = element('TRNUID', UID)
    clt_cookie: str | None = element('CLTCOOKIE', String, optional=True)
    tan: str | None = element('TAN', String, optional=True)
    dt_acct_up: datetime | None = element('ACCTINFORQ>DTACCTUP', Date)


@dataclass(slots=True)
class HolderInfo(Aggregate):
    first_name: str | None = element('FIRSTNAME', String)
    middle_name: str | None = element('MIDDLENAME', String, optional=True)
    last_name: str | None = element('LASTNAME', String)
    addr1: str | None = element('ADDR1', String)
    addr2: str | None = element('ADDR2', String, optional=True)
    addr3: str | None = element('ADDR3', String, optional=True)
    city: str | None = element('CITY', String)
    state: str | None = element('STATE', String)
    postal_code: str | None = element('POSTALCODE', String)
    country: str | None = element('COUNTRY', String, optional=True)
    day_phone: str | None = element('DAYPHONE', String, optional=True)
    eve_phone: str | None = element('EVEPHONE', String, optional=True)
    email: str | None = element('EMAIL', String, optional=True)
    holder_type: str | None = element('HOLDERTYPE', String, optional=True)


@dataclass(slots=True)
class BankAcctInfo(Aggregate):
    bank_acct_from: BankAcct | None = element('BANKACCTFROM', BankAcct)
    sup_tx_dl: bool | None = element('SUPTXDL', Boolean)
    xfer_src: bool | None = element('XFERSRC', Boolean)
    xfer_dest: bool | None = element('XFERDEST', Boolean)
    maturity_date: datetime | None = element('MATURITYDATE', Date, optional=True)
    maturity_amt: Fraction | None = element('MATURITYAMOUNT', Amount, optional=True)
    min_bal_req: Fraction | None = element('MINBALREQ', Amount, optional=True)
    acct_classification: str | None = element('ACCTCLASSIFICATION', String, optional=True)
    overdraft_limit: Fraction | None = element('OVERDRAFTLIMIT', Amount, optional=True)
    svc_status: SvcStatus | None = element('SVCSTATUS', SvcStatus)


@dataclass(slots=True)
class CCAcctInfo(Aggregate):
    cc_acct_from: CCAcct | None = element('CCACCTFROM', CCAcct)
    sup_tx_dl: bool | None = element('SUPTXDL', Boolean)
    xfer_src: bool | None = element('XFERSRC', Boolean)
    xfer_dest: bool | None = element('XFERDEST', Boolean)
    acct_classification: str | None = element('ACCTCLASSIFICATION', String, optional=True)
    svc_status: SvcStatus | None = element('SVCSTATUS', SvcStatus)


@dataclass(slots=True)
class InvAcctInfo(Aggregate):
    inv_acct_from: InvAcct | None = element('INVACCTFROM', InvAcct)
    us_product_type: str | None = element('USPRODUCTTYPE', String)
    checking: bool | None = element('CHECKING', Boolean)
    svc_status: SvcStatus | None = element('SVCSTATUS', SvcStatus)
    inv_acct_type: str | None = element('INVACCTTYPE', String, optional=True)
    option_level: str | None = element('OPTIONLEVEL', String, optional=True)


@dataclass(slots=True)
class AcctInfo(Aggregate):
    """One account available to the user, with the services it supports."""

    name: str | None = element('NAME', String, optional=True)
    desc: str | None = element('DESC', String, optional=True)
    phone: str | None = element('PHONE', String, optional=True)
    primary_holder: HolderInfo | None = element('HOLDERINFO>PRIMARYHOLDER', HolderInfo, optional=True)
    secondary_holder: HolderInfo | None = element('HOLDERINFO>SECONDARYHOLDER', HolderInfo, optional=True)
    bank_acct_info: BankAcctInfo | None = element('BANKACCTINFO', BankAcctInfo, optional=True)
    cc_acct_info: CCAcctInfo | None = element('CCACCTINFO', CCAcctInfo, optional=True)
    inv_acct_info: InvAcctInfo | None = element('INVACCTINFO', InvAcctInfo, optional=True)

    def validate(self) -> None:
        accounts = []
        if self.bank_acct_info is not None:
            accounts.append(self.bank_acct_info.bank_acct_from)
        if self.cc_acct_info is not None:
            accounts.append(self.cc_acct_info.cc_acct_from)
        if self.inv_acct_info is not None:
            accounts.append(self.inv_acct_info.inv_acct_from)
        for account in accounts:
            if account is None:
                raise ValidityError('ACCTINFO service is missing its account')
            account.validate()


@dataclass(slots=True)
class AcctInfoResponse(Message):
    """Accounts available to the user, ACCTINFOTRNRS."""

    ELEMENT = 'ACCTINFOTRNRS'
    MESSAGE_TYPE = MessageType.SIGNUP_RS

    trnuid: UID | None = element('TRNUID', UID)
    status: Status | None = element('STATUS', Status)
    clt_cookie: str | None = element('CLTCOOKIE', String, optional=True)
    dt_acct_up: datetime | None = element('ACCTINFORS>DTACCTUP', Date, optional=True)
    acct_info: list[AcctInfo] = element('ACCTINFORS>ACCTINFO', AcctInfo, many=True)

    def validate(self, version: OfxVersion) -> None:
        Message.validate(self, version)
        for info in self.acct_info:
            info.validate()
        if self.acct_info and self.dt_acct_up is None:
            raise ValidityError('ACCTINFORS>DTACCTUP is required')
