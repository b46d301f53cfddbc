"""
Commission calculation service
Computes sales value from unit counts and the tiered commission on it
"""

from datetime import datetime
from typing import Optional

from .config import COMMISSION_TIERS, DEFAULT_EMPLOYEE_NAME, UNIT_PRICES
from .models import Entry, ValidationResult
from .validation import validate


def compute_sales(locks: int, stocks: int, barrels: int) -> float:
    """
    Calculate total sales: $45 per lock, $30 per stock, $25 per barrel.
    No range checks here; validate() guards the domain.
    """
    return float(
        UNIT_PRICES["locks"] * locks
        + UNIT_PRICES["stocks"] * stocks
        + UNIT_PRICES["barrels"] * barrels
    )


def compute_commission(sales: float) -> float:
    """
    Calculate commission with progressive rates:
    10% on the first $1,000, 15% on the next $800, 20% on everything above $1,800

    Args:
        sales: Total sales amount

    Returns:
        Commission amount (not rounded)
    """
    commission = 0.0
    lower = 0.0

    for upper, rate in COMMISSION_TIERS:
        if upper is None or sales <= upper:
            return commission + (sales - lower) * rate
        commission += (upper - lower) * rate
        lower = upper

    return commission


def evaluate(entry_id: int, name: str, raw_locks: str, raw_stocks: str, raw_barrels: str,
             created_at: Optional[str] = None) -> Entry:
    """
    Turn one form submission into an Entry. Never raises for string input;
    invalid submissions produce an Entry with zero sales/commission and the errors.
    """
    return build_entry(entry_id, name, validate(name, raw_locks, raw_stocks, raw_barrels), created_at)


def build_entry(entry_id: int, name: str, result: ValidationResult,
                created_at: Optional[str] = None) -> Entry:
    """Entry for an already validated submission; amounts stay zero unless result is valid."""
    sales = 0.0
    commission = 0.0
    if result.is_valid:
        counts = result.counts
        sales = compute_sales(counts.locks, counts.stocks, counts.barrels)
        commission = compute_commission(sales)

    return Entry(
        id=entry_id,
        name=(name or "").strip() or DEFAULT_EMPLOYEE_NAME,
        locks=result.locks,
        stocks=result.stocks,
        barrels=result.barrels,
        sales=sales,
        commission=commission,
        is_valid=result.is_valid,
        errors=tuple(result.errors),
        created_at=created_at if created_at is not None else datetime.now().isoformat(timespec="seconds"),
    )
