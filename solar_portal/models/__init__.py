"""
Database models for Solar Portal.

All models are exported here for convenient imports:
    from solar_portal.models import CommissionRuleRecord, DealRecord
"""

from solar_portal.models.base import Base, TimestampMixin
from solar_portal.models.commission_rule import CommissionRuleRecord
from solar_portal.models.deal import DealRecord

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    # Commissions
    "CommissionRuleRecord",
    # Deals
    "DealRecord",
]
