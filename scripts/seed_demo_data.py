"""
Seed demo commission rules and deals for local reconciliation testing.

Usage:
    python scripts/seed_demo_data.py

Or with custom DATABASE_URL:
    DATABASE_URL="postgresql://..." python scripts/seed_demo_data.py

This script creates (tables are created if missing):
- A statewide TX rule and a higher-priority rep override
- An expired rule that should never match today
- Closed deals for reps A and B, one of them in a state with no rule
"""

import asyncio
import os
import sys
from datetime import date
from decimal import Decimal

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select

from solar_portal.db import engine, get_db_context
from solar_portal.models import Base, CommissionRuleRecord, DealRecord


DEMO_RULES = [
    {
        "name": "TX standard",
        "state": "TX",
        "commission_basis": "contract_value",
        "agent_commission_pct": Decimal("5"),
        "effective_start": date(2024, 1, 1),
        "priority": 10,
    },
    {
        "name": "Rep B per-kW override",
        "sales_rep": "B",
        "commission_basis": "per_kw",
        "agent_commission_pct": Decimal("5"),
        "agent_flat_amount": Decimal("100"),
        "effective_start": date(2024, 1, 1),
        "priority": 100,
    },
    {
        "name": "2023 promo (expired)",
        "commission_basis": "net_price",
        "agent_commission_pct": Decimal("10"),
        "effective_start": date(2023, 1, 1),
        "effective_end": date(2023, 12, 31),
        "priority": 500,
    },
]

DEMO_DEALS = [
    {"customer_name": "Garcia", "sales_rep": "A", "state": "TX", "company": "SunBuild",
     "contract_value": Decimal("50000"), "kw_system": Decimal("8"),
     "net_price_per_watt": Decimal("2.5"), "agent_payout": Decimal("2400"),
     "date_closed": date(2024, 3, 4)},
    {"customer_name": "Nguyen", "sales_rep": "A", "state": "CA", "company": "SunBuild",
     "contract_value": Decimal("60000"), "kw_system": Decimal("10"),
     "net_price_per_watt": Decimal("2.8"), "agent_payout": Decimal("3000"),
     "date_closed": date(2024, 3, 11)},
    {"customer_name": "Okafor", "sales_rep": "B", "state": "TX", "install_partner": "Bright Roofs",
     "contract_value": Decimal("40000"), "kw_system": Decimal("10"),
     "net_price_per_watt": Decimal("2.4"), "agent_payout": Decimal("600"),
     "date_closed": date(2024, 3, 15)},
    {"customer_name": "Walsh", "sales_rep": None, "state": "TX",
     "contract_value": Decimal("30000"), "kw_system": Decimal("6"),
     "net_price_per_watt": None, "agent_payout": Decimal("1500"),
     "date_closed": date(2024, 3, 20)},
]


async def seed_demo_rows() -> bool:
    """Insert demo rows unless rules already exist. Returns True if seeded."""
    async with get_db_context() as db:
        existing = await db.execute(select(CommissionRuleRecord).limit(1))
        if existing.scalar_one_or_none():
            return False

        for data in DEMO_RULES:
            db.add(CommissionRuleRecord(**data))
            print(f"  + rule: {data['name']}")

        for data in DEMO_DEALS:
            db.add(DealRecord(**data))
            print(f"  + deal: {data['customer_name']} ({data['sales_rep'] or 'no rep'})")

    return True


async def seed_all() -> None:
    """Create tables and seed demo data."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    seeded = await seed_demo_rows()
    await engine.dispose()

    if not seeded:
        print("Commission rules already present, skipping seed.")
        return

    print("\n" + "="*50)
    print("DEMO DATA CREATED SUCCESSFULLY!")
    print("="*50)
    print("""
Try:
  GET /api/commissions/reconciliation?as_of=2024-06-01
  GET /api/commissions/rules?as_of=2024-06-01
    """)


if __name__ == "__main__":
    asyncio.run(seed_all())
