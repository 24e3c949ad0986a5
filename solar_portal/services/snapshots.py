"""
Immutable snapshots consumed and produced by the commission engine.

Rules and deals are copied out of the store into these dataclasses before
reconciliation, so the engine never touches ORM state and every evaluation
works on its own frozen input.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, List, Optional, Union

ZERO = Decimal("0")


class Wildcard(Enum):
    """Marker for a scoping attribute that matches any deal value."""
    ANY = "*"

    def __repr__(self) -> str:
        return "WILDCARD"


WILDCARD = Wildcard.ANY

# A scoping attribute is either a concrete value or WILDCARD
Scope = Union[str, Wildcard]


def to_scope(value: Any) -> Scope:
    """Convert a nullable store value to a scope (None or blank -> WILDCARD)."""
    if value is None or value is WILDCARD:
        return WILDCARD
    if isinstance(value, str) and value == "":
        return WILDCARD
    return value


def to_decimal(value: Any) -> Decimal:
    """
    Coerce a numeric-ish value to Decimal.

    Missing, non-numeric, NaN and infinite values become 0 so a bad field
    degrades the payout instead of breaking the batch.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            return ZERO
    else:
        return ZERO

    if not result.is_finite():
        return ZERO
    return result


def optional_decimal(value: Any) -> Optional[Decimal]:
    """Like to_decimal, but keeps None as None (absent rule parameters)."""
    if value is None:
        return None
    return to_decimal(value)


def to_date(value: Any) -> Optional[date]:
    """Accept a date, datetime or ISO string; anything else becomes None."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None


class CommissionBasis(str, Enum):
    """What a percentage commission is applied against."""
    CONTRACT = "contract"      # contract_value
    PER_KW = "per_kw"          # system size in watts
    NET_PRICE = "net_price"    # net $/W x watts

    @classmethod
    def parse(cls, value: Any) -> "CommissionBasis":
        """Unknown or legacy values ("contract_value") fall back to CONTRACT."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.CONTRACT


@dataclass(frozen=True)
class CommissionRule:
    """A named, time-scoped payout policy."""
    id: Any
    name: str
    effective_start: Optional[date]
    effective_end: Optional[date] = None
    is_active: bool = True
    priority: int = 0

    sales_rep: Scope = WILDCARD
    team: Scope = WILDCARD
    install_partner: Scope = WILDCARD
    state: Scope = WILDCARD

    commission_basis: CommissionBasis = CommissionBasis.CONTRACT
    agent_commission_pct: Optional[Decimal] = None
    agent_flat_amount: Optional[Decimal] = None

    # Reserved: carried for display, never computed by reconciliation
    manager_commission_pct: Optional[Decimal] = None
    manager_flat_amount: Optional[Decimal] = None
    setter_commission_pct: Optional[Decimal] = None
    setter_flat_amount: Optional[Decimal] = None
    company_margin_pct: Optional[Decimal] = None

    def __post_init__(self):
        for attr in ("sales_rep", "team", "install_partner", "state"):
            object.__setattr__(self, attr, to_scope(getattr(self, attr)))
        object.__setattr__(self, "effective_start", to_date(self.effective_start))
        object.__setattr__(self, "effective_end", to_date(self.effective_end))
        object.__setattr__(self, "commission_basis", CommissionBasis.parse(self.commission_basis))
        for attr in (
            "agent_commission_pct",
            "agent_flat_amount",
            "manager_commission_pct",
            "manager_flat_amount",
            "setter_commission_pct",
            "setter_flat_amount",
            "company_margin_pct",
        ):
            object.__setattr__(self, attr, optional_decimal(getattr(self, attr)))


@dataclass(frozen=True)
class Deal:
    """
    A closed sale.

    Financial fields are kept exactly as the store returned them and are
    coerced with to_decimal at the point of use.
    """
    id: Any
    sales_rep: Optional[str] = None
    team: Optional[str] = None
    install_partner: Optional[str] = None
    company: Optional[str] = None
    state: Optional[str] = None

    contract_value: Any = None
    kw_system: Any = None
    net_price_per_watt: Any = None
    agent_payout: Any = None

    customer_name: Optional[str] = None
    date_closed: Optional[date] = None

    @property
    def effective_install_partner(self) -> Optional[str]:
        """Install partner, falling back to the installer company."""
        if self.install_partner is not None:
            return self.install_partner
        return self.company


@dataclass(frozen=True)
class DriftResult:
    """Outcome of comparing calculated vs. recorded payout."""
    has_drift: bool
    diff: Decimal  # actual - calculated; positive means overpaid


@dataclass(frozen=True)
class PayoutPreview:
    """What-if payout for a hypothetical deal."""
    deal: Deal
    matched_rule: Optional[CommissionRule]
    basis_amount: Decimal
    agent_payout: Decimal


@dataclass
class DealDetail:
    """Per-deal reconciliation line."""
    deal: Deal
    matched_rule: Optional[CommissionRule]
    calculated_payout: Decimal
    actual_payout: Decimal
    drift_amount: Decimal
    has_drift: bool


@dataclass
class RepSummary:
    """Per-representative totals."""
    rep_name: str
    representative_rule: Optional[CommissionRule]
    total_deals: int = 0
    total_contract_value: Decimal = ZERO
    total_actual_payout: Decimal = ZERO
    total_calculated_payout: Decimal = ZERO
    drift_count: int = 0
    deals: List[DealDetail] = field(default_factory=list)


@dataclass
class ReconciliationReport:
    """Full result of one engine evaluation."""
    as_of: date
    deal_details: List[DealDetail] = field(default_factory=list)
    rep_summaries: List[RepSummary] = field(default_factory=list)
    drift_deals: List[DealDetail] = field(default_factory=list)
