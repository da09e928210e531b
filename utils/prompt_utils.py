import getpass
import re
from datetime import date, datetime
from typing import Any, Callable, Optional
from pydantic import BaseModel
from utils.table_utils import format_table

CANCEL_SENTINEL = "E"
DATE_FORMAT = "%Y-%m-%d"
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class PromptResult(BaseModel):
    """Either a value entered by the user or a cancellation"""
    cancelled: bool = False
    value: Any = None

    @classmethod
    def of(cls, value: Any) -> "PromptResult":
        return cls(value=value)


CANCELLED = PromptResult(cancelled=True)


def parse_date(text: str) -> date:
    """Parse a literal yyyy-MM-dd date, raising ValueError otherwise"""
    text = text.strip()
    if not DATE_PATTERN.match(text):
        raise ValueError(f"'{text}' does not match YYYY-MM-DD")
    return datetime.strptime(text, DATE_FORMAT).date()


class Console:
    """Line-oriented prompts on top of injectable input/output functions"""

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], Any] = print,
        password_func: Callable[[str], str] = getpass.getpass,
    ):
        self.input_func = input_func
        self.output_func = output_func
        self.password_func = password_func

    def show(self, message: str = ""):
        self.output_func(message)

    def read(self, message: str) -> str:
        return self.input_func(message).strip()

    def read_password(self, message: str) -> str:
        return self.password_func(message)

    def ask(self, message: str, allow_cancel: bool = True) -> PromptResult:
        text = self.read(message)
        if allow_cancel and text.upper() == CANCEL_SENTINEL:
            return CANCELLED
        return PromptResult.of(text)

    def ask_date(self, message: str, allow_cancel: bool = True) -> PromptResult:
        while True:
            result = self.ask(message, allow_cancel=allow_cancel)
            if result.cancelled:
                return result
            try:
                return PromptResult.of(parse_date(result.value))
            except ValueError:
                self.show("Invalid date format. Please use YYYY-MM-DD.")

    def ask_period(self, allow_cancel: bool = True) -> PromptResult:
        """Prompt for a start date, then re-prompt the end date until it is not before the start"""
        suffix = " (or 'E' to exit)" if allow_cancel else ""
        start = self.ask_date(f"Enter the start date (YYYY-MM-DD){suffix}: ", allow_cancel=allow_cancel)
        if start.cancelled:
            return start

        while True:
            end = self.ask_date(f"Enter the end date (YYYY-MM-DD){suffix}: ", allow_cancel=allow_cancel)
            if end.cancelled:
                return end
            if end.value < start.value:
                self.show("End date should be after the start date. Please enter a valid end date.")
                continue
            return PromptResult.of((start.value, end.value))

    def show_table(self, headers, rows):
        for line in format_table(headers, rows):
            self.show(line)

    def ask_choice(self, message: str = "Enter the number corresponding to your choice: ") -> Optional[int]:
        text = self.read(message)
        try:
            return int(text)
        except ValueError:
            self.show("Invalid input. Please enter a valid number.")
            return None
