"""Codecs for the scalar OFX wire types.

Every codec exposes two classmethods, ``from_text(text)`` and ``to_text(value)``.
Decoded values are plain Python objects: ``int``, ``fractions.Fraction``,
``bool``, ``str`` and timezone-aware ``datetime``. ``UID`` and ``CurrSymbol``
are ``str`` subclasses so that they can carry their own validity checks.
"""

from __future__ import annotations

import re
import secrets
from datetime import datetime, timedelta, timezone, tzinfo
from enum import Enum
from fractions import Fraction
from typing import TYPE_CHECKING, Any, Protocol

from ofxcodec.errors import ScalarFormatError, ValidityError

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from decimal import Decimal

AMOUNT_PRECISION = 100
"""Digits kept after the decimal point when an amount has no terminating decimal form."""

GMT = timezone(timedelta(0), 'GMT')

_INT_RE = re.compile(r'[+-]?[0-9]+')
_AMOUNT_RE = re.compile(r'[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)')
_DATE_RE = re.compile(
    r'([0-9]{4})([0-9]{2})([0-9]{2})'
    r'(?:([0-9]{2})(?:([0-9]{2})(?:([0-9]{2})(?:\.([0-9]{3}))?)?)?)?'
)
_ZONE_RE = re.compile(r'([+-]?[0-9]+)(?:\.([0-9]{2}))?(?::([A-Za-z]+))?')
_ZONE_NAME_RE = re.compile(r'[A-Za-z]+')
_CURRENCY_RE = re.compile(r'[A-Z]{3}')


class ScalarCodec(Protocol):
    """Shape shared by every leaf codec, including ``OfxEnum`` subclasses."""

    @classmethod
    def from_text(cls, text: str) -> Any: ...

    @classmethod
    def to_text(cls, value: Any) -> str: ...


class Int:
    """Signed 64-bit integer."""

    MIN = -(2**63)
    MAX = 2**63 - 1

    @classmethod
    def from_text(cls, text: str) -> int:
        stripped = text.strip()
        if not _INT_RE.fullmatch(stripped):
            raise ScalarFormatError(f'invalid integer: {text!r}')
        value = int(stripped)
        if not cls.MIN <= value <= cls.MAX:
            raise ScalarFormatError(f'integer out of range: {stripped}')
        return value

    @classmethod
    def to_text(cls, value: int) -> str:
        return str(int(value))


def _decimal_places(denominator: int) -> int | None:
    """Digits needed to write ``1/denominator`` exactly, or ``None`` if it repeats."""

    twos = fives = 0
    while denominator % 2 == 0:
        denominator //= 2
        twos += 1
    while denominator % 5 == 0:
        denominator //= 5
        fives += 1
    if denominator != 1:
        return None
    return max(twos, fives)


class Amount:
    """Exact decimal amount stored as a ``Fraction``.

    Terminating decimals are written exactly, however many digits they need.
    Other amounts are written with ``AMOUNT_PRECISION`` fractional digits,
    rounded half away from zero.
    """

    @classmethod
    def from_text(cls, text: str) -> Fraction:
        stripped = text.strip().replace(',', '.', 1)
        if not _AMOUNT_RE.fullmatch(stripped):
            raise ScalarFormatError(f'invalid amount: {text!r}')
        return Fraction(stripped)

    @classmethod
    def to_text(cls, value: Fraction | int | Decimal) -> str:
        amount = Fraction(value)
        places = _decimal_places(amount.denominator)
        if places is None:
            places = AMOUNT_PRECISION
        scale = 10**places
        magnitude, remainder = divmod(abs(amount.numerator) * scale, amount.denominator)
        if 2 * remainder >= amount.denominator:
            magnitude += 1
        whole, fraction = divmod(magnitude, scale)
        text = str(whole)
        if places:
            text = f'{whole}.{fraction:0{places}d}'.rstrip('0').rstrip('.')
        if amount < 0 and text != '0':
            text = f'-{text}'
        return text


class Boolean:
    """Single letter ``Y`` or ``N``."""

    @classmethod
    def from_text(cls, text: str) -> bool:
        stripped = text.strip()
        if stripped == 'Y':
            return True
        if stripped == 'N':
            return False
        raise ScalarFormatError(f'invalid boolean: {text!r}')

    @classmethod
    def to_text(cls, value: bool) -> str:
        return 'Y' if value else 'N'


class String:
    """Free text. Servers pad text with newlines, so decoding strips it."""

    @classmethod
    def from_text(cls, text: str) -> str:
        return text.strip()

    @classmethod
    def to_text(cls, value: str) -> str:
        return str(value)


class UID(str):
    """Client or server transaction identifier."""

    __slots__ = ()

    @classmethod
    def from_text(cls, text: str) -> UID:
        return cls(text.strip())

    @classmethod
    def to_text(cls, value: str) -> str:
        return str(value)

    def validate(self) -> None:
        """Raise ``ValidityError`` unless the UID holds between 1 and 36 characters."""

        if not 0 < len(self) <= 36:
            raise ValidityError(f'UID must hold 1 to 36 characters, got {len(self)}')

    def validate_recommended_format(self) -> None:
        """Raise ``ValidityError`` unless the UID is grouped 8-4-4-4-12 like a UUID."""

        self.validate()
        if len(self) != 36:
            raise ValidityError('UID is not 36 characters long')
        if any(self[index] != '-' for index in (8, 13, 18, 23)):
            raise ValidityError('UID is not grouped 8-4-4-4-12 with hyphens')


def random_uid() -> UID:
    """Return a UID built from 16 cryptographically random bytes."""

    digits = secrets.token_bytes(16).hex()
    return UID(f'{digits[:8]}-{digits[8:12]}-{digits[12:16]}-{digits[16:20]}-{digits[20:]}')


def _parse_zone(zone: str) -> timezone:
    match = _ZONE_RE.fullmatch(zone)
    if match is None:
        raise ScalarFormatError(f'invalid time zone: {zone!r}')
    hours, hundredths, name = match.groups()
    magnitude = timedelta(hours=int(hours.lstrip('+-')), minutes=int(hundredths or 0) * 60 // 100)
    if magnitude >= timedelta(hours=24):
        raise ScalarFormatError(f'time zone offset out of range: {zone!r}')
    offset = -magnitude if hours.startswith('-') else magnitude
    if name:
        return timezone(offset, name)
    return timezone(offset)


def _zone_name(value: datetime) -> str | None:
    name = value.tzname()
    if not name or not _ZONE_NAME_RE.fullmatch(name):
        return None
    # timezone objects built without a name report a generated one
    if isinstance(value.tzinfo, timezone) and name == timezone(value.utcoffset() or timedelta(0)).tzname(None):
        return None
    return name


class Date:
    """Timestamp of the form ``YYYYMMDD[HH[MM[SS[.XXX]]]][+H[.FF][:NAME]]``.

    Decoding always yields an aware ``datetime``; text without a zone bracket
    is UTC. Only the first bracket is read, anything after its ``]`` is
    ignored. Naive datetimes are encoded as UTC.
    """

    @classmethod
    def from_text(cls, text: str) -> datetime:
        value = text.split(']', 1)[0].strip()
        stamp, bracket, zone = value.partition('[')
        match = _DATE_RE.fullmatch(stamp.strip())
        if match is None:
            raise ScalarFormatError(f'invalid date: {text!r}')
        tzinfo = _parse_zone(zone.strip()) if bracket else timezone.utc
        year, month, day, hour, minute, second, millis = match.groups()
        try:
            return datetime(
                int(year),
                int(month),
                int(day),
                int(hour or 0),
                int(minute or 0),
                int(second or 0),
                int(millis or 0) * 1000,
                tzinfo=tzinfo,
            )
        except ValueError as exc:
            raise ScalarFormatError(f'invalid date: {text!r}') from exc

    @classmethod
    def to_text(cls, value: datetime) -> str:
        if value.utcoffset() is None:
            value = value.replace(tzinfo=timezone.utc)
        offset = int((value.utcoffset() or timedelta(0)).total_seconds())
        hours, remainder = divmod(abs(offset), 3600)
        zone = f'-{hours}' if offset < 0 else str(hours)
        if remainder // 36:
            zone += f'.{remainder // 36:02d}'
        name = _zone_name(value)
        if name:
            zone += f':{name}'
        return f'{value:%Y%m%d%H%M%S}.{value.microsecond // 1000:03d}[{zone}]'


def new_date(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    millisecond: int = 0,
    zone: tzinfo | None = None,
) -> datetime:
    """Return an aware ``datetime``; ``zone`` defaults to UTC."""

    return datetime(year, month, day, hour, minute, second, millisecond * 1000, tzinfo=zone or timezone.utc)


def new_date_gmt(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    millisecond: int = 0,
) -> datetime:
    """Return a ``datetime`` in the named GMT zone."""

    return datetime(year, month, day, hour, minute, second, millisecond * 1000, tzinfo=GMT)


class CurrSymbol(str):
    """ISO-4217 three letter currency code.

    Only the shape is checked: three letters, and never the XXX placeholder.
    Codes missing from the ISO-4217 table, such as ABC, are accepted.
    """

    __slots__ = ()

    @classmethod
    def from_text(cls, text: str) -> CurrSymbol:
        stripped = text.strip().upper()
        if not _CURRENCY_RE.fullmatch(stripped):
            raise ScalarFormatError(f'invalid currency symbol: {text!r}')
        return cls(stripped)

    @classmethod
    def to_text(cls, value: str) -> str:
        return str(value)

    def validate(self) -> None:
        if not _CURRENCY_RE.fullmatch(self) or self == 'XXX':
            raise ValidityError(f'invalid currency symbol: {str(self)!r}')


class OfxEnum(str, Enum):
    """Enumerated leaf value that encodes as its own wire spelling."""

    @classmethod
    def from_text(cls, text: str) -> Any:
        try:
            return cls(text.strip())
        except ValueError as exc:
            raise ScalarFormatError(f'invalid {cls.__name__}: {text!r}') from exc

    @classmethod
    def to_text(cls, value: Any) -> str:
        return cls(value).value
