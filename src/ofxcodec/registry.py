"""Read-only maps from (message set, element name) to message class.

Message sets without a schema in this package map to an empty table, so any
child element found inside them is rejected.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from ofxcodec.aggregate import Message
from ofxcodec.bank import StatementRequest, StatementResponse
from ofxcodec.constants import MessageType
from ofxcodec.creditcard import CCStatementRequest, CCStatementResponse
from ofxcodec.invstmt import InvStatementRequest, InvStatementResponse
from ofxcodec.profile import ProfileRequest, ProfileResponse
from ofxcodec.seclist import SecListRequest, SecListResponse, SecurityList
from ofxcodec.signup import AcctInfoRequest, AcctInfoResponse

REQUEST_MESSAGE_SETS = (
    MessageType.SIGNUP_RQ,
    MessageType.BANK_RQ,
    MessageType.CREDIT_CARD_RQ,
    MessageType.LOAN_RQ,
    MessageType.INV_STMT_RQ,
    MessageType.INTER_XFER_RQ,
    MessageType.WIRE_XFER_RQ,
    MessageType.BILLPAY_RQ,
    MessageType.EMAIL_RQ,
    MessageType.SEC_LIST_RQ,
    MessageType.PRES_DIR_RQ,
    MessageType.PRES_DLV_RQ,
    MessageType.PROF_RQ,
    MessageType.IMAGE_RQ,
)
"""Request message sets after signon, in the order they are written."""

RESPONSE_MESSAGE_SETS = (
    MessageType.SIGNUP_RS,
    MessageType.BANK_RS,
    MessageType.CREDIT_CARD_RS,
    MessageType.LOAN_RS,
    MessageType.INV_STMT_RS,
    MessageType.INTER_XFER_RS,
    MessageType.WIRE_XFER_RS,
    MessageType.BILLPAY_RS,
    MessageType.EMAIL_RS,
    MessageType.SEC_LIST_RS,
    MessageType.PRES_DIR_RS,
    MessageType.PRES_DLV_RS,
    MessageType.PROF_RS,
    MessageType.IMAGE_RS,
)
"""Response message sets after signon, in the order they are written."""


def _build(message_sets: Iterable[MessageType], classes: Iterable[type[Message]]) -> Mapping[str, Mapping[str, type[Message]]]:
    tables: dict[str, dict[str, type[Message]]] = {message_set.value: {} for message_set in message_sets}
    for cls in classes:
        table = tables[cls.MESSAGE_TYPE.value]
        if cls.ELEMENT in table:
            raise RuntimeError(f'{cls.ELEMENT} registered twice in {cls.MESSAGE_TYPE.value}')
        table[cls.ELEMENT] = cls
    return MappingProxyType({name: MappingProxyType(table) for name, table in tables.items()})


REQUEST_TYPES = _build(
    REQUEST_MESSAGE_SETS,
    (AcctInfoRequest, StatementRequest, CCStatementRequest, InvStatementRequest, SecListRequest, ProfileRequest),
)
RESPONSE_TYPES = _build(
    RESPONSE_MESSAGE_SETS,
    (
        AcctInfoResponse,
        StatementResponse,
        CCStatementResponse,
        InvStatementResponse,
        SecListResponse,
        SecurityList,
        ProfileResponse,
    ),
)
