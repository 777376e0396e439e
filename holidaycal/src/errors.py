"""Holiday error hierarchy.

Every failure raised by holidaycal derives from HolidayError and also from the
closest builtin, so callers can catch either.
"""


class HolidayError(Exception):
    """Base exception for holidaycal errors."""


class CountryNotFoundError(HolidayError, FileNotFoundError):
    """No rule-set source exists for the requested country code."""


class InvalidFormatError(HolidayError, ValueError):
    """A rule-set source exists but is malformed."""

    def __init__(self, message: str, errors: list[str] | None = None):
        self.errors = errors or []
        super().__init__(message)

    def __str__(self):
        if self.errors:
            return f"{self.args[0]}\n" + "\n".join(f"  - {e}" for e in self.errors)
        return self.args[0]


class InvalidDateError(HolidayError, ValueError):
    """A fixed-date rule names a day that does not exist in the target year."""


class InvalidRuleError(HolidayError, ValueError):
    """An nth-weekday rule asks for an occurrence the month does not have."""


class TypeMismatchError(HolidayError, TypeError):
    """A value that is not a Holiday was inserted into a collection."""
