from __future__ import annotations

from datetime import date

import pytest

from airbooking import validation


def test_birth_date_requires_real_past_date():
    assert validation.parse_birth_date(" 12/10/1990 ") == date(1990, 12, 10)
    with pytest.raises(ValueError):
        validation.parse_birth_date("1990-12-10")
    with pytest.raises(ValueError):
        validation.parse_birth_date("02/30/2000")
    with pytest.raises(ValueError, match="future"):
        validation.parse_birth_date("01/02/2030", today=date(2025, 1, 1))


def test_passport_number_length():
    assert validation.parse_passport_number("AB12345678") == "AB12345678"
    with pytest.raises(ValueError):
        validation.parse_passport_number("AB123456789")
    with pytest.raises(ValueError, match="blank"):
        validation.parse_passport_number("   ")


def test_parse_int_reports_bounds_and_garbage():
    assert validation.parse_int(" 7 ", minimum=1, maximum=10) == 7
    with pytest.raises(ValueError, match="whole number"):
        validation.parse_int("seven")
    with pytest.raises(ValueError, match="at least 1"):
        validation.parse_int("0", minimum=1)
    with pytest.raises(ValueError, match="at most 12"):
        validation.parse_month("13")


def test_travel_year_starts_after_2016():
    assert validation.parse_travel_year("2017") == 2017
    with pytest.raises(ValueError):
        validation.parse_travel_year("2016")
    with pytest.raises(ValueError, match="at most 9999"):
        validation.parse_travel_year("99999")


def test_integers_are_capped_to_column_range():
    assert validation.int_between(1)("2147483647") == 2147483647
    with pytest.raises(ValueError, match="at most 2147483647"):
        validation.int_between(1)("9" * 25)
    with pytest.raises(ValueError, match="at most"):
        validation.parse_int("2147483648")


def test_day_parser_knows_month_lengths():
    assert validation.day_parser(2020, 2)("29") == 29
    with pytest.raises(ValueError):
        validation.day_parser(2019, 2)("29")
    assert validation.day_parser(2019, 12)("31") == 31


def test_yes_no_answers():
    assert validation.parse_yes_no("Yes") is True
    assert validation.parse_yes_no("y") is True
    assert validation.parse_yes_no(" NO ") is False
    with pytest.raises(ValueError):
        validation.parse_yes_no("maybe")


def test_optional_text_turns_blank_into_none():
    assert validation.optional_text("   ") is None
    assert validation.optional_text(" nice ") == "nice"
