"""
Deal model for closed solar sales.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import Date, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from solar_portal.models.base import Base, TimestampMixin


class DealRecord(Base, TimestampMixin):
    """
    A closed sale as recorded by the sales pipeline.

    agent_payout is what was actually paid to the rep; reconciliation
    compares it against the payout the matching commission rule implies.
    """

    __tablename__ = "deals"

    id: Mapped[int] = mapped_column(primary_key=True)
    customer_name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    # Scoping fields
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
    company: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Installer company, used when install_partner is empty",
    )
    state: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
    )

    # Financials
    contract_value: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(12, 2),
        nullable=True,
    )
    kw_system: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 3),
        nullable=True,
    )
    net_price_per_watt: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(8, 4),
        nullable=True,
    )
    agent_payout: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(12, 2),
        nullable=True,
        comment="Amount actually paid to the sales rep",
    )

    date_closed: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<DealRecord(id={self.id}, sales_rep='{self.sales_rep}', contract_value={self.contract_value})>"
