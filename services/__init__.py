# services/__init__.py
from .invoice_service import InvoiceService, InvoiceTotals, recalculate_totals
from .income_service import monthly_income, total_monthly_income
from .late_tenant_service import aggregate_late_tenants, get_late_tenants
from .metrics_service import get_dashboard_metrics, get_profit_metrics
from .payment_service import record_payment, allocate_payment, apply_manual_allocations
from .period_service import friday_columns, periods_for_lease, get_period_map, get_payment_grid
from .late_fee_service import (
     move_late_fee,
     waive_late_fees,
     remove_all_late_fees,
     remove_lease_late_fees,
)
from .notice_service import generate_notice

__all__ = [
     "InvoiceService",
     "InvoiceTotals",
     "recalculate_totals",
     "monthly_income",
     "total_monthly_income",
     "aggregate_late_tenants",
     "get_late_tenants",
     "get_dashboard_metrics",
     "get_profit_metrics",
     "record_payment",
     "allocate_payment",
     "apply_manual_allocations",
     "friday_columns",
     "periods_for_lease",
     "get_period_map",
     "get_payment_grid",
     "move_late_fee",
     "waive_late_fees",
     "remove_all_late_fees",
     "remove_lease_late_fees",
     "generate_notice",
]
