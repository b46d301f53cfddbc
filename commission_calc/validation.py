"""
Design (validation.py)
- Purpose: Check raw form text for presence and numeric range.
- Inputs: name and the three unit-count strings exactly as typed.
- Outputs: ValidationResult with parsed counts (0 when unparsable) and ordered issues.
- Side effects: None.
- Thread-safety: Stateless; safe to call from any thread.

Both passes always run, so the user sees every problem at once:
presence errors for name/locks/stocks/barrels, then range errors for
locks/stocks/barrels.
"""

import re
from typing import Optional

from .config import FIELD_LABELS, UNIT_RANGES
from .models import MISSING_FIELD, RANGE, ValidationIssue, ValidationResult

# Leading optionally-signed integer; anything after it is ignored ("3.9" -> 3)
COUNT_RGX = r"^\s*([+-]?[0-9]+)"

COUNT_FIELDS = ("locks", "stocks", "barrels")


def is_blank(s: Optional[str]) -> bool:
    return s is None or s.strip() == ""


def parse_count(s: Optional[str]) -> Optional[int]:
    """
    Parse a unit count typed by the user.

    Args:
        s: Raw text from the input

    Returns:
        The leading integer, or None when the text does not start with one
        or has too many digits to convert
    """
    if s is None:
        return None
    match = re.match(COUNT_RGX, s)
    if not match:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        # int() refuses strings past the interpreter's digit limit
        return None


def missing_message(field_name: str) -> str:
    return f"Please enter {FIELD_LABELS[field_name]}"


def range_message(field_name: str) -> str:
    low, high = UNIT_RANGES[field_name]
    return f"{FIELD_LABELS[field_name]} must be between {low} and {high}"


def in_range(field_name: str, value: Optional[int]) -> bool:
    if value is None:
        return False
    low, high = UNIT_RANGES[field_name]
    return low <= value <= high


def validate(name: str, raw_locks: str, raw_stocks: str, raw_barrels: str) -> ValidationResult:
    """
    Validate one submission of the form.

    Args:
        name: Employee name
        raw_locks: Locks count as typed
        raw_stocks: Stocks count as typed
        raw_barrels: Barrels count as typed

    Returns:
        ValidationResult; unparsable counts are stored as 0 but still reported
        as range errors
    """
    raw = {"name": name, "locks": raw_locks, "stocks": raw_stocks, "barrels": raw_barrels}
    result = ValidationResult()

    for field_name in ("name",) + COUNT_FIELDS:
        if is_blank(raw[field_name]):
            result.issues.append(ValidationIssue(MISSING_FIELD, field_name, missing_message(field_name)))

    for field_name in COUNT_FIELDS:
        value = parse_count(raw[field_name])
        setattr(result, field_name, 0 if value is None else value)
        if not in_range(field_name, value):
            result.issues.append(ValidationIssue(RANGE, field_name, range_message(field_name)))

    return result
