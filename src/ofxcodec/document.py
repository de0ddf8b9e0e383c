"""Whole OFX documents: request and response envelopes, encoding and parsing."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, BinaryIO

from ofxcodec.aggregate import INDENT, Encoder, Message, child_elements, leaf_elements
from ofxcodec.constants import MessageType, OfxVersion
from ofxcodec.errors import StructuralParseError, ValidityError
from ofxcodec.header import format_header, open_document
from ofxcodec.registry import REQUEST_MESSAGE_SETS, REQUEST_TYPES, RESPONSE_MESSAGE_SETS, RESPONSE_TYPES
from ofxcodec.signon import SignonRequest, SignonResponse
from ofxcodec.tokens import EndElement, StartElement, describe

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Mapping, Sequence

    from ofxcodec.aggregate import Aggregate
    from ofxcodec.tokens import TokenReader

LOGGER = logging.getLogger(__name__)

MESSAGE_SET_FIELDS = (
    'signup',
    'bank',
    'credit_card',
    'loan',
    'inv_stmt',
    'inter_xfer',
    'wire_xfer',
    'billpay',
    'email',
    'sec_list',
    'pres_dir',
    'pres_dlv',
    'prof',
    'image',
)
"""Document attributes holding each message set, in canonical order."""


@dataclass(slots=True)
class Document:
    """State shared by requests and responses.

    Each message-set attribute is a list of messages in document order.
    ``indent`` and ``carriage_return`` only affect the whitespace written by
    :meth:`marshal`.
    """

    version: OfxVersion = OfxVersion.V203
    signup: list[Message] = field(default_factory=list)
    bank: list[Message] = field(default_factory=list)
    credit_card: list[Message] = field(default_factory=list)
    loan: list[Message] = field(default_factory=list)
    inv_stmt: list[Message] = field(default_factory=list)
    inter_xfer: list[Message] = field(default_factory=list)
    wire_xfer: list[Message] = field(default_factory=list)
    billpay: list[Message] = field(default_factory=list)
    email: list[Message] = field(default_factory=list)
    sec_list: list[Message] = field(default_factory=list)
    pres_dir: list[Message] = field(default_factory=list)
    pres_dlv: list[Message] = field(default_factory=list)
    prof: list[Message] = field(default_factory=list)
    image: list[Message] = field(default_factory=list)
    indent: bool = field(default=True, compare=False)
    carriage_return: bool = field(default=False, compare=False)

    def message_sets(self) -> list[tuple[MessageType, list[Message]]]:
        """Return ``(message set, messages)`` pairs in the order they are written."""

        return [(message_set, getattr(self, name)) for message_set, name in zip(self._MESSAGE_SETS, MESSAGE_SET_FIELDS)]

    def marshal(self) -> bytes:
        """Validate the document and return its wire form.

        The header matches ``version``; versions below 200 produce SGML with
        unclosed leaf elements and are encoded as cp1252, later versions
        produce UTF-8 XML.
        """

        version = OfxVersion.from_string(str(self.version))
        newline = '\r\n' if self.carriage_return else '\n'
        encoder = Encoder(sgml=version.is_sgml, indent=INDENT if self.indent else None, newline=newline)
        encoder.raw(format_header(version, newline))
        encoder.start('OFX')

        signon = self.signon
        if signon is None:
            raise ValidityError(f'{self._SIGNON_TYPE.value} requires a {self._SIGNON.ELEMENT}')
        signon.validate(version)
        encoder.start(self._SIGNON_TYPE.value)
        signon.write_element(encoder, signon.ELEMENT)
        encoder.end(self._SIGNON_TYPE.value)

        for message_set, messages in self.message_sets():
            if not messages:
                continue
            encoder.start(message_set.value)
            for message in messages:
                if message.message_type() is not message_set:
                    raise ValidityError(f'{message.element_name()} does not belong in {message_set.value}')
                message.validate(version)
                message.write(encoder)
            encoder.end(message_set.value)
        encoder.end('OFX')

        if version.is_sgml:
            return encoder.getvalue().encode('cp1252', 'xmlcharrefreplace')
        return encoder.getvalue().encode('utf-8')


@dataclass(slots=True)
class Request(Document):
    """Client request: a signon followed by request message sets."""

    _SIGNON = SignonRequest
    _SIGNON_TYPE = MessageType.SIGNON_RQ
    _MESSAGE_SETS = REQUEST_MESSAGE_SETS

    signon: SignonRequest | None = None


@dataclass(slots=True)
class Response(Document):
    """Server response: a signon followed by response message sets."""

    _SIGNON = SignonResponse
    _SIGNON_TYPE = MessageType.SIGNON_RS
    _MESSAGE_SETS = RESPONSE_MESSAGE_SETS

    signon: SignonResponse | None = None


def _read(source: bytes | bytearray | memoryview | BinaryIO) -> bytes:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    return source.read()


def _decode_message_set(
    reader: TokenReader,
    start: StartElement,
    table: Mapping[str, type[Message]],
    version: OfxVersion,
    messages: list[Message],
    *,
    validate: bool,
) -> None:
    LOGGER.debug('Decoding message set %s', start.name)
    for child in child_elements(reader, start):
        cls = table.get(child.name)
        if cls is None:
            raise StructuralParseError(f'unsupported <{child.name}> inside <{start.name}>')
        message = cls.from_element(reader, child)
        if validate:
            message.validate(version)
        messages.append(message)


def _decode(
    data: bytes,
    document_type: type[Document],
    registry: Mapping[str, Mapping[str, type[Message]]],
    *,
    validate: bool,
) -> Any:
    header, reader = open_document(data, leaf_elements=leaf_elements())
    document = document_type(version=header.version)
    fields = dict(zip((message_set.value for message_set in document_type._MESSAGE_SETS), MESSAGE_SET_FIELDS))

    reader.expect_start('OFX')
    signon_type: MessageType = document_type._SIGNON_TYPE
    signon_cls: type[Aggregate] = document_type._SIGNON
    reader.expect_start(signon_type.value)
    document.signon = signon_cls.from_element(reader, reader.expect_start(signon_cls.ELEMENT))
    reader.expect_end(signon_type.value)
    if validate:
        document.signon.validate(header.version)

    while True:
        token = reader.next_significant()
        if isinstance(token, EndElement) and token.name == 'OFX':
            break
        if not isinstance(token, StartElement) or token.name not in fields:
            raise StructuralParseError(f'unexpected {describe(token)} inside <OFX>')
        messages = getattr(document, fields[token.name])
        _decode_message_set(reader, token, registry[token.name], header.version, messages, validate=validate)

    LOGGER.debug('Decoded %d messages', sum(len(messages) for _, messages in document.message_sets()))
    return document


def parse_response(source: bytes | bytearray | memoryview | BinaryIO) -> Response:
    """Decode a response from bytes or a binary file and validate every message."""

    return _decode(_read(source), Response, RESPONSE_TYPES, validate=True)


def decode_response(source: bytes | bytearray | memoryview | BinaryIO) -> Response:
    """Decode a response without running any ``validate`` check."""

    return _decode(_read(source), Response, RESPONSE_TYPES, validate=False)


def parse_request(source: bytes | bytearray | memoryview | BinaryIO) -> Request:
    """Decode a request from bytes or a binary file and validate every message."""

    return _decode(_read(source), Request, REQUEST_TYPES, validate=True)


def count_messages(document: Document) -> Sequence[tuple[str, int]]:
    """Return ``(message set, count)`` for every non-empty message set of ``document``."""

    return [(message_set.value, len(messages)) for message_set, messages in document.message_sets() if messages]
