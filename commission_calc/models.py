"""
Design (models.py)
- Purpose: Define simple, typed data structures for the calculator (unit counts,
           validation outcome, history entries).
- Inputs: Field values.
- Outputs: Dataclass instances; Entry converts to/from JSON-ready dicts.
- Side effects: None.
- Thread-safety: Entry is frozen; the others are plain containers.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

MISSING_FIELD = "missing"
RANGE = "range"


@dataclass(frozen=True)
class UnitCounts:
    locks: int
    stocks: int
    barrels: int


@dataclass(frozen=True)
class ValidationIssue:
    """
    Design (ValidationIssue)
    - Fields:
        kind: MISSING_FIELD (blank input) or RANGE (unparsable or out of bounds).
        field: "name", "locks", "stocks" or "barrels".
        message: text shown to the user.
    """
    kind: str
    field: str
    message: str


@dataclass
class ValidationResult:
    locks: int = 0
    stocks: int = 0
    barrels: int = 0
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> List[str]:
        return [issue.message for issue in self.issues]

    @property
    def is_valid(self) -> bool:
        return not self.issues

    @property
    def counts(self) -> UnitCounts:
        return UnitCounts(self.locks, self.stocks, self.barrels)

    def issues_for(self, field_name: str) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.field == field_name]


@dataclass(frozen=True)
class Entry:
    """
    Design (Entry)
    - Purpose: One recorded calculation attempt, valid or not.
    - Fields:
        id: sequence number assigned by History (never derived from list length).
        name: employee name (placeholder when left blank).
        locks/stocks/barrels: parsed counts, 0 when the text was not a number.
        sales/commission: computed amounts; exactly 0 when is_valid is False.
        is_valid: True iff errors is empty.
        errors: validation messages in reporting order.
        created_at: ISO timestamp of the calculation ("" for legacy records).
    """
    id: int
    name: str
    locks: int
    stocks: int
    barrels: int
    sales: float
    commission: float
    is_valid: bool
    errors: Tuple[str, ...] = ()
    created_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "locks": self.locks,
            "stocks": self.stocks,
            "barrels": self.barrels,
            "sales": self.sales,
            "commission": self.commission,
            "isValid": self.is_valid,
            "errors": list(self.errors),
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Entry":
        """
        Build an Entry from a stored dict. Raises TypeError/ValueError/KeyError on
        records that are missing an id or carry non-numeric values.
        Validity comes from the error list, not the stored isValid flag; invalid
        records carry zero sales and commission.
        """
        errors = data.get("errors") or []
        if not isinstance(errors, list):
            raise TypeError("errors must be a list")
        is_valid = not errors
        sales = float(data.get("sales", 0)) if is_valid else 0.0
        commission = float(data.get("commission", 0)) if is_valid else 0.0
        return cls(
            id=int(data["id"]),
            name=str(data.get("name", "")),
            locks=int(data.get("locks", 0)),
            stocks=int(data.get("stocks", 0)),
            barrels=int(data.get("barrels", 0)),
            sales=sales,
            commission=commission,
            is_valid=is_valid,
            errors=tuple(str(e) for e in errors),
            created_at=str(data.get("createdAt", "")),
        )
