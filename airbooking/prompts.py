"""Interactive prompt loops used by the menu actions."""
from __future__ import annotations

import sys
from datetime import date
from typing import Callable, TextIO, TypeVar

from . import validation

T = TypeVar("T")


class MenuExit(Exception):
    """Raised when the user chooses to go back to the main menu."""


class Prompter:
    """Reads answers from ``stdin`` and writes prompts to ``stdout``.

    End of input raises :class:`EOFError` so the caller can shut down.
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

    def write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def say(self, text: str) -> None:
        self.write(f"\t{text}\n")

    def read(self, label: str) -> str:
        self.write(f"\t{label} ")
        line = self.stdin.readline()
        if line == "":
            raise EOFError("no more input")
        return line.rstrip("\r\n")

    def offer_exit(self, message: str, *, exit_token: str = "1") -> None:
        """Show ``message`` and leave the action if the user types ``exit_token``."""

        answer = self.read(f"{message} Try again or enter {exit_token} to exit.")
        if answer.strip() == exit_token:
            raise MenuExit()

    def ask(
        self,
        label: str,
        parse: Callable[[str], T] = validation.require_text,
        *,
        exit_token: str = "1",
    ) -> T:
        """Ask until ``parse`` accepts the answer, offering an exit after each failure."""

        while True:
            raw = self.read(label)
            try:
                return parse(raw)
            except ValueError as exc:
                self.offer_exit(f"Invalid entry ({exc}).", exit_token=exit_token)

    def ask_or_exit(
        self,
        label: str,
        parse: Callable[[str], T],
        *,
        exit_token: str = "-1",
    ) -> T:
        """Ask until ``parse`` accepts the answer; typing ``exit_token`` leaves the action."""

        while True:
            raw = self.read(f"{label} (enter {exit_token} to exit):")
            if raw.strip().lower() == exit_token.lower():
                raise MenuExit()
            try:
                return parse(raw)
            except ValueError as exc:
                self.say(f"Please enter a valid value: {exc}.")

    def confirm(self, question: str, *, exit_token: str = "Exit") -> bool:
        while True:
            raw = self.read(f"{question} (Yes or No)")
            if raw.strip().lower() == exit_token.lower():
                raise MenuExit()
            try:
                return validation.parse_yes_no(raw)
            except ValueError:
                self.say(f"You did not enter a valid response. Answer Yes, No or {exit_token}.")

    def retry_or_exit(self, message: str) -> None:
        """Return if the user wants another attempt (0); raise :class:`MenuExit` on 1."""

        while True:
            answer = self.read(f"{message} Press 0 to try again or 1 to exit.").strip()
            if answer == "0":
                return
            if answer == "1":
                raise MenuExit()
            self.say("You did not enter a valid choice.")

    def ask_date(self, purpose: str) -> date:
        year = self.ask_or_exit(
            f"Enter the year {purpose}. (After {validation.FIRST_TRAVEL_YEAR - 1})",
            validation.parse_travel_year,
        )
        month = self.ask_or_exit(f"Enter the month {purpose}. (Between 1-12)", validation.parse_month)
        parse_day = validation.day_parser(year, month)
        day = self.ask_or_exit(f"Enter the day {purpose}.", parse_day)
        return date(year, month, day)

    def choose_index(self, count: int, label: str) -> int:
        """Pick an index in ``range(count)``; ``-1`` leaves the action."""

        return self.ask_or_exit(label, validation.int_between(0, count - 1))
