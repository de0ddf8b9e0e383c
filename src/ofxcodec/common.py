"""Aggregates shared by several message sets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ofxcodec.aggregate import Aggregate, element
from ofxcodec.constants import AcctType, BalType
from ofxcodec.errors import ValidityError
from ofxcodec.types import Amount, CurrSymbol, Date, Int, String

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from datetime import datetime
    from fractions import Fraction

SEVERITIES = ('INFO', 'WARN', 'ERROR')

STATUS_MEANINGS: dict[int, tuple[str, str]] = {
    0: ('Success', 'INFO'),
    1: ('Client is up-to-date', 'INFO'),
    2000: ('General error', 'ERROR'),
    2001: ('Invalid account', 'ERROR'),
    2002: ('General account error', 'ERROR'),
    2003: ('Account not found', 'ERROR'),
    2004: ('Account closed', 'ERROR'),
    2005: ('Account not authorized', 'ERROR'),
    2006: ('Source account not found', 'ERROR'),
    2007: ('Source account closed', 'ERROR'),
    2008: ('Source account not authorized', 'ERROR'),
    2009: ('Destination account not found', 'ERROR'),
    2010: ('Destination account closed', 'ERROR'),
    2011: ('Destination account not authorized', 'ERROR'),
    2012: ('Invalid amount', 'ERROR'),
    2014: ('Date too soon', 'ERROR'),
    2015: ('Date too far in future', 'ERROR'),
    2016: ('Transaction already committed', 'ERROR'),
    2017: ('Already canceled', 'ERROR'),
    2018: ('Unknown server ID', 'ERROR'),
    2019: ('Duplicate request', 'ERROR'),
    2020: ('Invalid date', 'ERROR'),
    2021: ('Unsupported version', 'ERROR'),
    2022: ('Invalid TAN', 'ERROR'),
    2023: ('Unknown FITID', 'ERROR'),
    2025: ('Branch ID missing', 'ERROR'),
    2026: ('Bank name doesn’t match bank ID', 'ERROR'),
    2027: ('Invalid date range', 'ERROR'),
    2028: ('Requested element unknown', 'WARN'),
    3000: ('MFA Challenge authentication required', 'ERROR'),
    3001: ('MFA Challenge information is invalid', 'ERROR'),
    6500: ('<REJECTIFMISSING>Y invalid without <TOKEN>', 'ERROR'),
    6501: ('Embedded transactions in request failed to process: Out of date', 'WARN'),
    6502: ('Unable to process embedded transaction due to out-of-date <TOKEN>', 'ERROR'),
    10000: ('Stop check in process', 'INFO'),
    10500: ('Too many checks to process', 'ERROR'),
    10501: ('Invalid payee', 'ERROR'),
    10502: ('Invalid payee address', 'ERROR'),
    10503: ('Invalid payee account number', 'ERROR'),
    10504: ('Insufficient funds', 'ERROR'),
    10505: ('Cannot modify element', 'ERROR'),
    10506: ('Cannot modify source account', 'ERROR'),
    10507: ('Cannot modify destination account', 'ERROR'),
    10508: ('Invalid frequency', 'ERROR'),
    10509: ('Model already canceled', 'ERROR'),
    10510: ('Invalid payee ID', 'ERROR'),
    10511: ('Invalid payee city', 'ERROR'),
    10512: ('Invalid payee state', 'ERROR'),
    10513: ('Invalid payee postal code', 'ERROR'),
    10514: ('Transaction already processed', 'ERROR'),
    10515: ('Payee not modifiable by client', 'ERROR'),
    10516: ('Wire beneficiary invalid', 'ERROR'),
    10517: ('Invalid payee name', 'ERROR'),
    10518: ('Unknown model ID', 'ERROR'),
    10519: ('Invalid payee list ID', 'ERROR'),
    10600: ('Table type not found', 'ERROR'),
    12250: ('Investment transaction download not supported', 'WARN'),
    12251: ('Investment position download not supported', 'WARN'),
    12252: ('Investment positions for specified date not available', 'WARN'),
    12253: ('Investment open order download not supported', 'WARN'),
    12254: ('Investment balances download not supported', 'WARN'),
    12255: ('401(k) not available for this account', 'ERROR'),
    12500: ('One or more securities not found', 'ERROR'),
    13000: ('User ID & password will be sent out-of-band', 'INFO'),
    13500: ('Unable to enroll user', 'ERROR'),
    13501: ('User already enrolled', 'ERROR'),
    13502: ('Invalid service', 'ERROR'),
    13503: ('Cannot change user information', 'ERROR'),
    13504: ('<FI> Missing or Invalid in <SONRQ>', 'ERROR'),
    14500: ('1099 forms not available', 'ERROR'),
    14501: ('1099 forms not available for user ID', 'ERROR'),
    14600: ('W2 forms not available', 'ERROR'),
    14601: ('W2 forms not available for user ID', 'ERROR'),
    14700: ('1098 forms not available', 'ERROR'),
    14701: ('1098 forms not available for user ID', 'ERROR'),
    15000: ('Must change USERPASS', 'INFO'),
    15500: ('Signon invalid', 'ERROR'),
    15501: ('Customer account already in use', 'ERROR'),
    15502: ('USERPASS lockout', 'ERROR'),
    15503: ('Could not change USERPASS', 'ERROR'),
    15504: ('Could not provide random data', 'ERROR'),
    15505: ('Country system not supported', 'ERROR'),
    15506: ('Empty signon not supported', 'ERROR'),
    15507: ('Signon invalid without supporting pin change request', 'ERROR'),
    15508: ('Transaction not authorized. ', 'ERROR'),
    15510: ('CLIENTUID error', 'ERROR'),
    15511: ('MFA error', 'ERROR'),
    15512: ('AUTHTOKEN required', 'ERROR'),
    15513: ('AUTHTOKEN invalid', 'ERROR'),
    16500: ('HTML not allowed', 'ERROR'),
    16501: ('Unknown mail To:', 'ERROR'),
    16502: ('Invalid URL', 'ERROR'),
    16503: ('Unable to get URL', 'ERROR'),
}
"""OFX status codes mapped to their meaning and expected severity."""


@dataclass(slots=True)
class Status(Aggregate):
    """Outcome of a request, reported in every response wrapper."""

    code: int | None = element('CODE', Int)
    severity: str | None = element('SEVERITY', String)
    message: str | None = element('MESSAGE', String, optional=True)

    def validate(self) -> None:
        if self.severity not in SEVERITIES:
            raise ValidityError(f'invalid STATUS>SEVERITY {self.severity!r}')
        known = STATUS_MEANINGS.get(self.code) if self.code is not None else None
        if known is None:
            raise ValidityError(f'unknown OFX status code {self.code}')
        if known[1] != self.severity:
            raise ValidityError(f'status code {self.code} must have severity {known[1]}, got {self.severity}')

    def code_meaning(self) -> str:
        """Return the short meaning of ``code``."""

        return self._lookup()[0]

    def code_severity(self) -> str:
        """Return the severity OFX mandates for ``code``."""

        return self._lookup()[1]

    def _lookup(self) -> tuple[str, str]:
        try:
            return STATUS_MEANINGS[self.code]  # type: ignore[index]
        except KeyError:
            raise ValidityError(f'unknown OFX status code {self.code}') from None


@dataclass(slots=True)
class BankAcct(Aggregate):
    """Bank account, written as BANKACCTFROM or BANKACCTTO."""

    bank_id: str | None = element('BANKID', String)
    branch_id: str | None = element('BRANCHID', String, optional=True)
    acct_id: str | None = element('ACCTID', String)
    acct_type: AcctType | None = element('ACCTTYPE', AcctType)
    acct_key: str | None = element('ACCTKEY', String, optional=True)

    def validate(self) -> None:
        if not self.bank_id:
            raise ValidityError('BankAcct.bank_id empty')
        if not self.acct_id:
            raise ValidityError('BankAcct.acct_id empty')
        if self.acct_type is None:
            raise ValidityError('BankAcct.acct_type unspecified')


@dataclass(slots=True)
class CCAcct(Aggregate):
    """Credit card account, written as CCACCTFROM or CCACCTTO."""

    acct_id: str | None = element('ACCTID', String)
    acct_key: str | None = element('ACCTKEY', String, optional=True)

    def validate(self) -> None:
        if not self.acct_id:
            raise ValidityError('CCAcct.acct_id empty')


@dataclass(slots=True)
class InvAcct(Aggregate):
    """Brokerage account, written as INVACCTFROM or INVACCTTO."""

    broker_id: str | None = element('BROKERID', String)
    acct_id: str | None = element('ACCTID', String)

    def validate(self) -> None:
        if not self.broker_id:
            raise ValidityError('InvAcct.broker_id empty')
        if not self.acct_id:
            raise ValidityError('InvAcct.acct_id empty')


@dataclass(slots=True)
class Currency(Aggregate):
    """Currency a value is expressed in and its rate to the statement currency."""

    cur_rate: Fraction | None = element('CURRATE', Amount)
    cur_sym: CurrSymbol | None = element('CURSYM', CurrSymbol)

    def validate(self) -> None:
        if self.cur_rate is None or self.cur_rate == 0:
            raise ValidityError('Currency.cur_rate must be non-zero')
        if self.cur_sym is None:
            raise ValidityError('Currency.cur_sym unspecified')
        CurrSymbol(self.cur_sym).validate()


@dataclass(slots=True)
class Balance(Aggregate):
    """Named balance from a BALLIST."""

    name: str | None = element('NAME', String)
    desc: str | None = element('DESC', String)
    bal_type: BalType | None = element('BALTYPE', BalType)
    value: Fraction | None = element('VALUE', Amount)
    dt_as_of: datetime | None = element('DTASOF', Date, optional=True)
    currency: Currency | None = element('CURRENCY', Currency, optional=True)

    def validate(self) -> None:
        if not self.name:
            raise ValidityError('Balance.name empty')
        if not self.desc:
            raise ValidityError('Balance.desc empty')
        if self.bal_type is None:
            raise ValidityError('Balance.bal_type unspecified')
        if self.currency is not None:
            self.currency.validate()
