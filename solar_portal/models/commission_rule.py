"""
CommissionRule model: time-scoped payout policies.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, Date, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from solar_portal.models.base import Base, TimestampMixin


class CommissionRuleRecord(Base, TimestampMixin):
    """
    A named commission rule as stored by the portal's rule administration.

    NULL scoping columns (sales_rep, team, install_partner, state) mean
    "any value". This application only reads this table; rules are created
    and edited elsewhere.
    """

    __tablename__ = "commission_rules"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # Scope (NULL = wildcard)
    sales_rep: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        index=True,
    )
    team: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    install_partner: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    state: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
        index=True,
    )

    # Payout parameters
    commission_basis: Mapped[str] = mapped_column(
        String(30),
        default="contract_value",
        nullable=False,
        comment="contract_value | per_kw | net_price",
    )
    agent_commission_pct: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(7, 4),
        nullable=True,
    )
    agent_flat_amount: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(12, 2),
        nullable=True,
    )
    manager_commission_pct: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(7, 4),
        nullable=True,
        comment="Reserved, not used by reconciliation",
    )
    manager_flat_amount: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(12, 2),
        nullable=True,
        comment="Reserved, not used by reconciliation",
    )
    setter_commission_pct: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(7, 4),
        nullable=True,
        comment="Reserved, not used by reconciliation",
    )
    setter_flat_amount: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(12, 2),
        nullable=True,
        comment="Reserved, not used by reconciliation",
    )
    company_margin_pct: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(7, 4),
        nullable=True,
        comment="Reserved, not used by reconciliation",
    )

    # Validity window (both bounds inclusive)
    effective_start: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )
    effective_end: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )
    priority: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
        index=True,
    )

    notes: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<CommissionRuleRecord(id={self.id}, name='{self.name}', priority={self.priority})>"
