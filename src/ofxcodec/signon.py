"""Signon aggregates, the fixed first element of every document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ofxcodec.aggregate import Aggregate, element
from ofxcodec.common import Status
from ofxcodec.errors import ValidityError
from ofxcodec.types import UID, Date, String

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from datetime import datetime

    from ofxcodec.constants import OfxVersion


@dataclass(slots=True)
class SignonRequest(Aggregate):
    """Credentials and client identification sent in SONRQ."""

    ELEMENT = 'SONRQ'

    dt_client: datetime | None = element('DTCLIENT', Date)
    user_id: str | None = element('USERID', String)
    user_pass: str | None = element('USERPASS', String, optional=True)
    user_key: str | None = element('USERKEY', String, optional=True)
    language: str | None = element('LANGUAGE', String, default='ENG')
    org: str | None = element('FI>ORG', String, optional=True)
    fid: str | None = element('FI>FID', String, optional=True)
    app_id: str | None = element('APPID', String)
    app_ver: str | None = element('APPVER', String)
    client_uid: UID | None = element('CLIENTUID', UID, optional=True)

    def validate(self, version: OfxVersion) -> None:
        if self.dt_client is None:
            raise ValidityError('SONRQ>DTCLIENT is required')
        if not self.user_id or len(self.user_id) > 32:
            raise ValidityError('SONRQ>USERID must hold 1 to 32 characters')
        if bool(self.user_pass) == bool(self.user_key):
            raise ValidityError('SONRQ requires exactly one of USERPASS and USERKEY')
        if self.user_pass and len(self.user_pass) > 32:
            raise ValidityError('SONRQ>USERPASS is longer than 32 characters')
        if self.user_key and len(self.user_key) > 64:
            raise ValidityError('SONRQ>USERKEY is longer than 64 characters')
        if not self.language or len(self.language) != 3:
            raise ValidityError(f'SONRQ>LANGUAGE must be 3 characters, got {self.language!r}')
        if not self.app_id or len(self.app_id) > 5:
            raise ValidityError('SONRQ>APPID must hold 1 to 5 characters')
        if not self.app_ver or len(self.app_ver) > 4:
            raise ValidityError('SONRQ>APPVER must hold 1 to 4 characters')
        if self.client_uid:
            UID(self.client_uid).validate()


@dataclass(slots=True)
class SignonResponse(Aggregate):
    """Server acknowledgement of the signon, SONRS."""

    ELEMENT = 'SONRS'

    status: Status | None = element('STATUS', Status)
    dt_server: datetime | None = element('DTSERVER', Date)
    user_key: str | None = element('USERKEY', String, optional=True)
    ts_key_expire: datetime | None = element('TSKEYEXPIRE', Date, optional=True)
    language: str | None = element('LANGUAGE', String)
    dt_prof_up: datetime | None = element('DTPROFUP', Date, optional=True)
    dt_acct_up: datetime | None = element('DTACCTUP', Date, optional=True)
    org: str | None = element('FI>ORG', String, optional=True)
    fid: str | None = element('FI>FID', String, optional=True)
    sess_cookie: str | None = element('SESSCOOKIE', String, optional=True)
    access_key: str | None = element('ACCESSKEY', String, optional=True)

    def validate(self, version: OfxVersion) -> None:
        if self.status is None:
            raise ValidityError('SONRS>STATUS is required')
        self.status.validate()
        if not self.language or len(self.language) != 3:
            raise ValidityError(f'SONRS>LANGUAGE must be 3 characters, got {self.language!r}')
