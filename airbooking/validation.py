"""Parsers for values typed at the prompts.

Every parser takes the raw line and either returns the converted value or
raises :class:`ValueError` with a short, user-facing reason.
"""
from __future__ import annotations

import calendar
from datetime import MAXYEAR, date, datetime
from typing import Callable, Optional

FIRST_TRAVEL_YEAR = 2017
MAX_PASSPORT_LENGTH = 10
MAX_FLIGHT_NUMBER_LENGTH = 8
MIN_SCORE = 1
MAX_SCORE = 5
# Largest value an INTEGER column holds on every supported backend.
MAX_INTEGER = 2**31 - 1

YES_ANSWERS = ("yes", "y")
NO_ANSWERS = ("no", "n")


def require_text(raw: str, *, max_length: Optional[int] = None) -> str:
    value = raw.strip()
    if not value:
        raise ValueError("entry cannot be blank")
    if max_length is not None and len(value) > max_length:
        raise ValueError(f"entry must be at most {max_length} characters")
    return value


def optional_text(raw: str) -> Optional[str]:
    value = raw.strip()
    return value or None


def parse_int(raw: str, *, minimum: Optional[int] = None, maximum: int = MAX_INTEGER) -> int:
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{raw.strip()!r} is not a whole number") from None
    if minimum is not None and value < minimum:
        raise ValueError(f"value must be at least {minimum}")
    if value > maximum:
        raise ValueError(f"value must be at most {maximum}")
    return value


def int_between(minimum: Optional[int] = None, maximum: int = MAX_INTEGER) -> Callable[[str], int]:
    def parse(raw: str) -> int:
        return parse_int(raw, minimum=minimum, maximum=maximum)

    return parse


def parse_passport_number(raw: str) -> str:
    return require_text(raw, max_length=MAX_PASSPORT_LENGTH)


def parse_flight_number(raw: str) -> str:
    return require_text(raw, max_length=MAX_FLIGHT_NUMBER_LENGTH)


def parse_birth_date(raw: str, *, today: Optional[date] = None) -> date:
    """Parse an ``mm/dd/yyyy`` birth date that is not in the future."""

    value = raw.strip()
    try:
        parsed = datetime.strptime(value, "%m/%d/%Y").date()
    except ValueError:
        raise ValueError("birth date must be a real date written as mm/dd/yyyy") from None
    if parsed > (today or date.today()):
        raise ValueError("birth date cannot be in the future")
    return parsed


def parse_travel_year(raw: str) -> int:
    return parse_int(raw, minimum=FIRST_TRAVEL_YEAR, maximum=MAXYEAR)


def parse_month(raw: str) -> int:
    return parse_int(raw, minimum=1, maximum=12)


def day_parser(year: int, month: int) -> Callable[[str], int]:
    last_day = calendar.monthrange(year, month)[1]
    return int_between(1, last_day)


def parse_score(raw: str) -> int:
    return parse_int(raw, minimum=MIN_SCORE, maximum=MAX_SCORE)


def parse_yes_no(raw: str) -> bool:
    answer = raw.strip().lower()
    if answer in YES_ANSWERS:
        return True
    if answer in NO_ANSWERS:
        return False
    raise ValueError("please answer Yes or No")
