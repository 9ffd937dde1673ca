from __future__ import annotations

from datetime import datetime

# fixed English names; strftime %B follows the process locale
MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def long_date(value: datetime) -> str:
    """January 5, 2024"""
    return f"{MONTHS[value.month - 1]} {value.day}, {value.year}"


def short_date(value: datetime) -> str:
    """Jan 5, 2024"""
    return f"{MONTHS[value.month - 1][:3]} {value.day}, {value.year}"
