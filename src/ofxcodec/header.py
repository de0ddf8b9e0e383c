"""Document headers: syntax detection, parsing and templated output."""

from __future__ import annotations

import codecs
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from ofxcodec.constants import OfxVersion
from ofxcodec.errors import HeaderFormatError
from ofxcodec.tokens import ProcInst, TokenReader

LOGGER = logging.getLogger(__name__)

DETECTION_WINDOW = 1024
"""Number of leading bytes searched for a header marker."""

SGML_HEADER_TEMPLATE = (
    'OFXHEADER:100{nl}'
    'DATA:OFXSGML{nl}'
    'VERSION:{version}{nl}'
    'SECURITY:NONE{nl}'
    'ENCODING:USASCII{nl}'
    'CHARSET:1252{nl}'
    'COMPRESSION:NONE{nl}'
    'OLDFILEUID:NONE{nl}'
    'NEWFILEUID:NONE{nl}'
    '{nl}'
)
XML_HEADER_TEMPLATE = (
    '<?xml version="1.0" encoding="UTF-8" standalone="no"?>{nl}'
    '<?OFX OFXHEADER="200" VERSION="{version}" SECURITY="NONE" OLDFILEUID="NONE" NEWFILEUID="NONE"?>{nl}'
)

_SGML_INFORMATIONAL = frozenset({'ENCODING', 'CHARSET', 'OLDFILEUID', 'NEWFILEUID'})
_XML_INFORMATIONAL = frozenset({'OLDFILEUID', 'NEWFILEUID'})
_PI_ATTRIBUTE_RE = re.compile(r'([A-Za-z]+)\s*=\s*"([^"]*)"')
_XML_ENCODING_RE = re.compile(rb'<\?xml[^>]*?encoding\s*=\s*["\']([A-Za-z0-9._-]+)["\']')
_SGML_CHARSETS = {
    '1252': 'cp1252',
    'ISO-8859-1': 'latin-1',
    '8859-1': 'latin-1',
    'UTF-8': 'utf-8',
}


class Syntax(str, Enum):
    """Wire syntax of a document."""

    SGML = 'sgml'
    XML = 'xml'


@dataclass(slots=True)
class Header:
    """Values read from a document header."""

    version: OfxVersion
    security: str = 'NONE'
    encoding: str | None = None
    charset: str | None = None
    old_file_uid: str | None = None
    new_file_uid: str | None = None

    @property
    def syntax(self) -> Syntax:
        return Syntax.SGML if self.version.is_sgml else Syntax.XML


def detect_syntax(data: bytes) -> Syntax:
    """Guess the wire syntax from the first ``DETECTION_WINDOW`` bytes.

    The earlier of the two header markers wins; XML is assumed when neither
    is present.
    """

    prefix = data[:DETECTION_WINDOW]
    sgml_index = prefix.find(b'OFXHEADER:')
    xml_index = prefix.find(b'OFXHEADER=')
    if sgml_index == -1:
        return Syntax.XML
    if xml_index == -1:
        return Syntax.SGML
    return Syntax.XML if xml_index <= sgml_index else Syntax.SGML


def _check_version(value: str, syntax: Syntax) -> OfxVersion:
    version = OfxVersion.from_string(value)
    if (syntax is Syntax.SGML) != version.is_sgml:
        raise HeaderFormatError(f'version {version} is not a valid {syntax.value.upper()} version')
    return version


def _apply(header_values: dict[str, str], key: str, value: str, informational: frozenset[str]) -> None:
    if key in header_values:
        raise HeaderFormatError(f'duplicate header {key}')
    if key in ('SECURITY', 'COMPRESSION') and value != 'NONE':
        raise HeaderFormatError(f'unsupported {key}: {value!r}')
    if key not in informational and key not in ('OFXHEADER', 'DATA', 'VERSION', 'SECURITY', 'COMPRESSION'):
        raise HeaderFormatError(f'unexpected header {key}')
    header_values[key] = value


def _build_header(values: dict[str, str], syntax: Syntax) -> Header:
    if 'VERSION' not in values:
        raise HeaderFormatError('header does not declare a VERSION')
    return Header(
        version=_check_version(values['VERSION'], syntax),
        security=values.get('SECURITY', 'NONE'),
        encoding=values.get('ENCODING'),
        charset=values.get('CHARSET'),
        old_file_uid=values.get('OLDFILEUID'),
        new_file_uid=values.get('NEWFILEUID'),
    )


def parse_sgml_header(data: bytes) -> tuple[Header, int]:
    """Parse ``KEY:VALUE`` header lines and return the header plus the body offset.

    The header normally ends with a blank line, but some servers start the
    body right after the last header line, so the next byte is peeked as well.
    """

    values: dict[str, str] = {}
    pos = 0
    while True:
        line_end = data.find(b'\n', pos)
        if line_end == -1:
            raise HeaderFormatError('SGML header is not terminated')
        line = data[pos:line_end].decode('ascii', 'replace').strip()
        pos = line_end + 1
        if not line:
            if values:
                break
            continue
        key, sep, value = line.partition(':')
        if not sep:
            raise HeaderFormatError(f'malformed header line {line!r}')
        key, value = key.strip(), value.strip()
        if not values and key != 'OFXHEADER':
            raise HeaderFormatError(f'header must start with OFXHEADER, found {key}')
        _apply(values, key, value, _SGML_INFORMATIONAL)
        if data[pos : pos + 1] == b'<':
            break

    if values['OFXHEADER'] != '100':
        raise HeaderFormatError(f'unsupported OFXHEADER: {values["OFXHEADER"]!r}')
    if values.get('DATA') != 'OFXSGML':
        raise HeaderFormatError(f'unsupported DATA: {values.get("DATA")!r}')
    return _build_header(values, Syntax.SGML), pos


def parse_xml_header(reader: TokenReader) -> Header:
    """Read the XML declaration and the ``<?OFX ...?>`` instruction from ``reader``."""

    declaration = reader.next_significant()
    if not isinstance(declaration, ProcInst) or declaration.target != 'xml':
        raise HeaderFormatError('missing XML declaration')
    instruction = reader.next_significant()
    if not isinstance(instruction, ProcInst) or instruction.target != 'OFX':
        raise HeaderFormatError('missing <?OFX ...?> processing instruction')

    values: dict[str, str] = {}
    remainder = _PI_ATTRIBUTE_RE.sub('', instruction.content).strip()
    if remainder:
        raise HeaderFormatError(f'malformed OFX processing instruction: {instruction.content!r}')
    for key, value in _PI_ATTRIBUTE_RE.findall(instruction.content):
        _apply(values, key, value, _XML_INFORMATIONAL)
    if values.get('OFXHEADER') != '200':
        raise HeaderFormatError(f'unsupported OFXHEADER: {values.get("OFXHEADER")!r}')
    return _build_header(values, Syntax.XML)


def _sgml_codec(header: Header) -> str:
    if header.encoding and header.encoding.upper() in ('UTF-8', 'UTF8'):
        return 'utf-8'
    return _SGML_CHARSETS.get((header.charset or '').upper(), 'utf-8')


def _xml_codec(data: bytes) -> str:
    match = _XML_ENCODING_RE.search(data[:DETECTION_WINDOW])
    name = match.group(1).decode('ascii') if match else 'utf-8'
    try:
        codec = codecs.lookup(name).name
    except LookupError as exc:
        raise HeaderFormatError(f'unknown XML encoding {name!r}') from exc
    return 'utf-8-sig' if codec == 'utf-8' else codec


def open_document(data: bytes, *, leaf_elements: Iterable[str] = ()) -> tuple[Header, TokenReader]:
    """Parse the header of ``data`` and return a reader positioned on the body."""

    syntax = detect_syntax(data)
    if syntax is Syntax.SGML:
        start = data.find(b'OFXHEADER:')
        header, offset = parse_sgml_header(data[start:])
        text = data[start + offset :].decode(_sgml_codec(header), 'replace')
        reader = TokenReader(text, strict=False, leaf_elements=leaf_elements)
    else:
        reader = TokenReader(data.decode(_xml_codec(data), 'replace'), strict=True)
        header = parse_xml_header(reader)
    LOGGER.debug('Detected %s document, OFX version %s', syntax.value.upper(), header.version)
    return header, reader


def format_header(version: OfxVersion | int | str, newline: str = '\n') -> str:
    """Return the templated header for ``version``."""

    try:
        resolved = OfxVersion(int(version))
    except ValueError as exc:
        raise HeaderFormatError(f'unsupported OFX version: {version!r}') from exc
    template = SGML_HEADER_TEMPLATE if resolved.is_sgml else XML_HEADER_TEMPLATE
    return template.format(version=resolved.value, nl=newline)
