"""
ISBN helpers.

ISBN-10: nine digits plus a check character (0-9 or X = 10). The weighted
sum 10*d1 + 9*d2 + ... + 1*d10 must be divisible by 11.

ISBN-13: thirteen digits. Weights alternate 1, 3, 1, 3, ... and the
weighted sum must be divisible by 10.

Hyphens and spaces are allowed on input and stripped on normalization.
"""

import re

_SEPARATORS = re.compile(r"[-\s]")


def normalize_isbn(value: str) -> str:
    """Strip hyphens and spaces and uppercase a trailing x."""
    return _SEPARATORS.sub("", value).upper()


def is_valid_isbn10(value: str) -> bool:
    isbn = normalize_isbn(value)
    if not re.fullmatch(r"\d{9}[\dX]", isbn):
        return False

    total = 0
    for position, char in enumerate(isbn):
        digit = 10 if char == "X" else int(char)
        total += (10 - position) * digit
    return total % 11 == 0


def is_valid_isbn13(value: str) -> bool:
    isbn = normalize_isbn(value)
    if not re.fullmatch(r"\d{13}", isbn):
        return False

    total = sum(
        int(char) * (3 if position % 2 else 1)
        for position, char in enumerate(isbn)
    )
    return total % 10 == 0


def clean_isbn13(value: str | None) -> str | None:
    """
    Validate and normalize an ISBN-13 for use as a pydantic validator.

    Raises:
        ValueError: If the value is not a valid ISBN-13
    """
    if value is None:
        return None
    if not is_valid_isbn13(value):
        raise ValueError("ISBN-13 must be 13 digits with a valid check digit")
    return normalize_isbn(value)


def clean_isbn10(value: str | None) -> str | None:
    """
    Validate and normalize an ISBN-10 for use as a pydantic validator.

    Raises:
        ValueError: If the value is not a valid ISBN-10
    """
    if value is None:
        return None
    if not is_valid_isbn10(value):
        raise ValueError(
            "ISBN-10 must be 9 digits followed by a digit or 'X' "
            "with a valid check character"
        )
    return normalize_isbn(value)
