"""Bangladeshi mobile number normalization.

The courier only accepts the 11-digit national form (``01XXXXXXXXX``).
Buyers type numbers with spaces, dashes, a ``+88`` prefix, or without
the leading zero, so every phone passes through ``normalize_phone``
before it is validated or sent anywhere.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from codstore.domain.exceptions import ValidationError

_NON_DIGITS = re.compile(r"[^0-9]")
_NATIONAL_MOBILE = re.compile(r"01[0-9]{9}")

NATIONAL_LENGTH = 11


def normalize_phone(raw: str) -> str:
    """Return the best 11-digit candidate for *raw*.

    The result is not guaranteed to be valid; use ``is_valid_phone``.
    """
    digits = _NON_DIGITS.sub("", raw or "")
    if len(digits) == 11 and digits.startswith("01"):
        return digits
    if len(digits) == 13 and digits.startswith("8801"):
        return digits[2:]
    if len(digits) == 10 and digits.startswith("1"):
        return "0" + digits
    return digits[-NATIONAL_LENGTH:]


def is_valid_phone(normalized: str) -> bool:
    """Exactly 11 ASCII digits starting with ``01``."""
    return _NATIONAL_MOBILE.fullmatch(normalized) is not None


@dataclass(frozen=True)
class PhoneNumber:
    """A validated national mobile number."""

    value: str

    def __post_init__(self) -> None:
        if not is_valid_phone(self.value):
            raise ValidationError(f"Invalid phone number: {self.value!r}")

    def __str__(self) -> str:
        return self.value

    @staticmethod
    def parse(raw: str, field: str = "phone") -> PhoneNumber:
        """Normalize and validate, naming *field* in the error."""
        normalized = normalize_phone(raw)
        if not is_valid_phone(normalized):
            raise ValidationError(
                f"{field}: please enter a valid 11-digit Bangladesh mobile "
                f"number (e.g. 01712345678)",
                field=field,
            )
        return PhoneNumber(normalized)

    @staticmethod
    def parse_optional(raw: str | None) -> PhoneNumber | None:
        """Normalize a secondary number, dropping it silently when invalid."""
        if not raw:
            return None
        normalized = normalize_phone(raw)
        if not is_valid_phone(normalized):
            return None
        return PhoneNumber(normalized)
