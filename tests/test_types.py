from datetime import datetime, timedelta, timezone
from fractions import Fraction

import pytest

from ofxcodec.constants import AcctType
from ofxcodec.errors import ScalarFormatError, ValidityError
from ofxcodec.types import (
    AMOUNT_PRECISION,
    GMT,
    UID,
    Amount,
    Boolean,
    CurrSymbol,
    Date,
    Int,
    String,
    new_date,
    new_date_gmt,
    random_uid,
)

EST = timezone(timedelta(hours=-5), 'EST')


def test_int_parses_signed_values() -> None:
    assert Int.from_text(' 42\n') == 42
    assert Int.from_text('-7') == -7
    assert Int.to_text(12) == '12'


@pytest.mark.parametrize('text', ['', '4.5', 'abc', str(2**63)])
def test_int_rejects_bad_text(text: str) -> None:
    with pytest.raises(ScalarFormatError):
        Int.from_text(text)


def test_amount_equal_forms_decode_equal() -> None:
    assert Amount.from_text('8.192') == Amount.from_text('8.19200')
    assert Amount.from_text('-200.00') == Fraction(-200)
    assert Amount.from_text('.5') == Fraction(1, 2)


def test_amount_accepts_comma_separator() -> None:
    assert Amount.from_text('12,50') == Fraction(25, 2)


@pytest.mark.parametrize('text', ['', '1.2.3', '12e3', 'ten'])
def test_amount_rejects_bad_text(text: str) -> None:
    with pytest.raises(ScalarFormatError):
        Amount.from_text(text)


def test_amount_encodes_terminating_decimals_exactly() -> None:
    assert Amount.to_text(Fraction(-200)) == '-200'
    assert Amount.to_text(Fraction(8192, 1000)) == '8.192'
    assert Amount.to_text(Fraction(1, 4)) == '0.25'
    assert Amount.to_text(0) == '0'


def test_amount_long_terminating_decimal_is_exact() -> None:
    value = Fraction(1, 2**120)
    text = Amount.to_text(value)
    assert len(text.split('.')[1]) == 120
    assert Amount.from_text(text) == value
    assert Amount.from_text(Amount.to_text(-value)) == -value


def test_amount_repeating_decimal_is_cut_off() -> None:
    text = Amount.to_text(Fraction(1, 12))
    digits = text.split('.')[1]
    assert len(digits) == AMOUNT_PRECISION
    assert digits.startswith('0833')
    assert abs(Amount.from_text(text) - Fraction(1, 12)) < Fraction(1, 10**AMOUNT_PRECISION)


def test_amount_rounds_half_away_from_zero() -> None:
    assert Amount.to_text(Fraction(2, 3)).endswith('67')
    assert Amount.to_text(Fraction(-2, 3)).startswith('-0.66')
    assert Amount.to_text(Fraction(-2, 3)).endswith('67')


def test_boolean_is_strict() -> None:
    assert Boolean.from_text('Y') is True
    assert Boolean.from_text('N\n') is False
    assert Boolean.to_text(True) == 'Y'
    assert Boolean.to_text(False) == 'N'


@pytest.mark.parametrize('text', ['y', 'n', '1', '', 'YES'])
def test_boolean_rejects_other_letters(text: str) -> None:
    with pytest.raises(ScalarFormatError):
        Boolean.from_text(text)


def test_string_strips_padding() -> None:
    assert String.from_text('\n  Checking account \r\n') == 'Checking account'


def test_uid_validation() -> None:
    UID('123').validate()
    with pytest.raises(ValidityError):
        UID('').validate()
    with pytest.raises(ValidityError):
        UID('x' * 37).validate()
    with pytest.raises(ValidityError):
        UID('123').validate_recommended_format()


def test_random_uid_uses_recommended_format() -> None:
    uid = random_uid()
    uid.validate_recommended_format()
    assert uid != random_uid()


def test_date_zone_forms_are_equal() -> None:
    plain = Date.from_text('20170314150926.053[0:GMT]')
    assert plain == Date.from_text('20170314150926.053[+0:GMT]')
    assert plain == Date.from_text('20170314150926.053[-0:GMT]')
    assert plain == new_date_gmt(2017, 3, 14, 15, 9, 26, 53)
    assert Date.from_text('20170314100926.053[-5:EST]') == plain


def test_date_without_zone_is_utc() -> None:
    value = Date.from_text('20060104')
    assert value == datetime(2006, 1, 4, tzinfo=timezone.utc)
    assert value.utcoffset() == timedelta(0)


def test_date_fractional_zone_offset() -> None:
    value = Date.from_text('20170314150926[5.50:IST]')
    assert value.utcoffset() == timedelta(hours=5, minutes=30)
    assert value.tzname() == 'IST'


def test_date_ignores_text_after_bracket() -> None:
    assert Date.from_text('20060115112303[-5:EST]junk') == new_date(2006, 1, 15, 11, 23, 3, zone=EST)


@pytest.mark.parametrize('text', ['2006', '20061301', '20060115112303[EST]', 'not a date'])
def test_date_rejects_bad_text(text: str) -> None:
    with pytest.raises(ScalarFormatError):
        Date.from_text(text)


def test_date_encoding_includes_zone() -> None:
    assert Date.to_text(new_date(2006, 1, 15, 11, 23, zone=EST)) == '20060115112300.000[-5:EST]'
    assert Date.to_text(new_date_gmt(2017, 3, 14, 15, 9, 26, 53)) == '20170314150926.053[0:GMT]'
    assert Date.to_text(datetime(2017, 3, 14, tzinfo=timezone(timedelta(hours=5, minutes=30)))) == (
        '20170314000000.000[5.50]'
    )


def test_date_encoding_treats_naive_as_utc() -> None:
    assert Date.to_text(datetime(2020, 2, 29, 8, 0, 1)) == '20200229080001.000[0]'


def test_currency_symbol() -> None:
    assert CurrSymbol.from_text('usd') == 'USD'
    CurrSymbol('EUR').validate()
    with pytest.raises(ValidityError):
        CurrSymbol('XXX').validate()
    with pytest.raises(ScalarFormatError):
        CurrSymbol.from_text('US')


def test_currency_symbol_checks_shape_only() -> None:
    CurrSymbol.from_text('ABC').validate()


def test_enumerated_values() -> None:
    assert AcctType.from_text('SAVINGS') is AcctType.SAVINGS
    assert AcctType.to_text(AcctType.CD) == 'CD'
    with pytest.raises(ScalarFormatError, match='AcctType'):
        AcctType.from_text('BROKERAGE')


def test_gmt_is_named() -> None:
    assert GMT.tzname(None) == 'GMT'
