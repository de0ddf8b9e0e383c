"""Financial institution profile (PROFMSGSRQV1 / PROFMSGSRSV1)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ofxcodec.aggregate import Aggregate, Encoder, Message, child_elements, element
from ofxcodec.common import Status
from ofxcodec.constants import MessageType
from ofxcodec.errors import StructuralParseError, ValidityError
from ofxcodec.tokens import StartElement
from ofxcodec.types import UID, Boolean, Date, Int, String

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from datetime import datetime
    from typing import Self

    from ofxcodec.constants import OfxVersion
    from ofxcodec.tokens import TokenReader

_MESSAGE_SET_VERSION_RE = re.compile(r'([A-Z0-9]+MSGSET)V[0-9]+')


@dataclass(slots=True)
class ProfileRequest(Message):
    ELEMENT = 'PROFTRNRQ'
    MESSAGE_TYPE = MessageType.PROF_RQ

    trnuid: UID | None = element('TRNUID', UID)
    client_routing: str = element('PROFRQ>CLIENTROUTING', String, default='NONE')
    dt_prof_up: datetime | None = element('PROFRQ>DTPROFUP', Date)

    def validate(self, version: OfxVersion) -> None:
        Message.validate(self, version)
        if self.client_routing != 'NONE':
            raise ValidityError(f'PROFRQ>CLIENTROUTING must be NONE, got {self.client_routing!r}')


@dataclass(slots=True)
class SignonInfo(Aggregate):
    """Password rules for one signon realm."""

    signon_realm: str | None = element('SIGNONREALM', String)
    min: int | None = element('MIN', Int)
    max: int | None = element('MAX', Int)
    char_type: str | None = element('CHARTYPE', String)
    case_sen: bool | None = element('CASESEN', Boolean)
    special: bool | None = element('SPECIAL', Boolean)
    spaces: bool | None = element('SPACES', Boolean)
    pin_ch: bool | None = element('PINCH', Boolean)
    chg_pin_first: bool | None = element('CHGPINFIRST', Boolean)
    user_cred1_label: str | None = element('USERCRED1LABEL', String, optional=True)
    user_cred2_label: str | None = element('USERCRED2LABEL', String, optional=True)
    client_uid_req: bool | None = element('CLIENTUIDREQ', Boolean, optional=True)
    auth_token_first: bool | None = element('AUTHTOKENFIRST', Boolean, optional=True)
    auth_token_label: str | None = element('AUTHTOKENLABEL', String, optional=True)
    auth_token_info_url: str | None = element('AUTHTOKENINFOURL', String, optional=True)
    mfa_challenge_supt: bool | None = element('MFACHALLENGESUPT', Boolean, optional=True)
    mfa_challenge_first: bool | None = element('MFACHALLENGEFIRST', Boolean, optional=True)
    access_token_req: bool | None = element('ACCESSTOKENREQ', Boolean, optional=True)


@dataclass(slots=True)
class MessageSet(Aggregate):
    """Core properties of one supported message set.

    ``name`` is the versioned element name, for example ``BANKMSGSETV1``.
    Message-set specific properties after MSGSETCORE are not decoded.
    """

    name: str = ''
    ver: str | None = element('MSGSETCORE>VER', String)
    url: str | None = element('MSGSETCORE>URL', String)
    ofx_sec: str | None = element('MSGSETCORE>OFXSEC', String)
    transp_sec: bool | None = element('MSGSETCORE>TRANSPSEC', Boolean)
    signon_realm: str | None = element('MSGSETCORE>SIGNONREALM', String)
    language: list[str] = element('MSGSETCORE>LANGUAGE', String, many=True)
    sync_mode: str | None = element('MSGSETCORE>SYNCMODE', String)

    @property
    def wrapper_name(self) -> str:
        """Name of the unversioned element enclosing this one, for example ``BANKMSGSET``."""

        match = _MESSAGE_SET_VERSION_RE.fullmatch(self.name)
        if match is None:
            raise ValidityError(f'invalid message set name {self.name!r}')
        return match.group(1)


@dataclass(slots=True)
class MessageSetList(Aggregate):
    """Message sets supported by the server, MSGSETLIST.

    Each child is an ``xxxMSGSET`` element holding exactly one versioned
    ``xxxMSGSETVn`` element.
    """

    message_sets: list[MessageSet] = field(default_factory=list)

    @classmethod
    def from_element(cls, reader: TokenReader, start: StartElement) -> Self:
        message_sets = []
        for wrapper in child_elements(reader, start):
            versioned = reader.next_significant()
            if not isinstance(versioned, StartElement):
                raise StructuralParseError(f'<{wrapper.name}> does not hold a versioned message set')
            message_set = MessageSet.from_element(reader, versioned)
            message_set.name = versioned.name
            message_sets.append(message_set)
            reader.expect_end(wrapper.name)
        return cls(message_sets)

    def write_element(self, encoder: Encoder, name: str) -> None:
        encoder.start(name)
        for message_set in self.message_sets:
            wrapper = message_set.wrapper_name
            encoder.start(wrapper)
            message_set.write_element(encoder, message_set.name)
            encoder.end(wrapper)
        encoder.end(name)


@dataclass(slots=True)
class ProfileResponse(Message):
    """Server profile, PROFTRNRS."""

    ELEMENT = 'PROFTRNRS'
    MESSAGE_TYPE = MessageType.PROF_RS

    trnuid: UID | None = element('TRNUID', UID)
    status: Status | None = element('STATUS', Status)
    message_set_list: MessageSetList | None = element('PROFRS>MSGSETLIST', MessageSetList, optional=True)
    signon_info_list: list[SignonInfo] = element('PROFRS>SIGNONINFOLIST>SIGNONINFO', SignonInfo, many=True)
    dt_prof_up: datetime | None = element('PROFRS>DTPROFUP', Date, optional=True)
    fi_name: str | None = element('PROFRS>FINAME', String, optional=True)
    addr1: str | None = element('PROFRS>ADDR1', String, optional=True)
    addr2: str | None = element('PROFRS>ADDR2', String, optional=True)
    addr3: str | None = element('PROFRS>ADDR3', String, optional=True)
    city: str | None = element('PROFRS>CITY', String, optional=True)
    state: str | None = element('PROFRS>STATE', String, optional=True)
    postal_code: str | None = element('PROFRS>POSTALCODE', String, optional=True)
    country: str | None = element('PROFRS>COUNTRY', String, optional=True)
    cs_phone: str | None = element('PROFRS>CSPHONE', String, optional=True)
    ts_phone: str | None = element('PROFRS>TSPHONE', String, optional=True)
    fax_phone: str | None = element('PROFRS>FAXPHONE', String, optional=True)
    url: str | None = element('PROFRS>URL', String, optional=True)
    email: str | None = element('PROFRS>EMAIL', String, optional=True)
