# services/income_service.py
"""
Monthly-equivalent income for a lease.

The dashboard and the profit report convert weekly/biweekly rent to a monthly
figure with different multipliers (4 vs 4.33 weeks, 2 vs 2.17 periods). Both
tables are kept as-is; pick one with the `context` argument.
"""
from decimal import Decimal
from typing import Iterable

from utils.cadence import BIWEEKLY, WEEKLY, normalize_cadence
from utils.currency import Numeric, safe_decimal

DASHBOARD = "dashboard"
PROFIT = "profit"

MONTHLY_FACTORS = {
     DASHBOARD: {WEEKLY: Decimal("4"), BIWEEKLY: Decimal("2")},
     PROFIT: {WEEKLY: Decimal("4.33"), BIWEEKLY: Decimal("2.17")},
}


def monthly_income(rent: Numeric, cadence, context: str = DASHBOARD) -> Decimal:
     """
     Monthly-equivalent of `rent` billed at `cadence`.

     Monthly and unrecognized cadences return the rent unchanged.

     Raises:
          KeyError: If context is not "dashboard" or "profit"
     """
     factors = MONTHLY_FACTORS[context]
     factor = factors.get(normalize_cadence(cadence), Decimal("1"))
     return safe_decimal(rent) * factor


def total_monthly_income(leases: Iterable, context: str = DASHBOARD) -> Decimal:
     """Sum monthly_income over objects exposing .rent and .rent_cadence."""
     return sum(
          (monthly_income(lease.rent, lease.rent_cadence, context) for lease in leases),
          Decimal("0"),
     )
