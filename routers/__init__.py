# routers/__init__.py
from .properties import router as properties_router
from .tenants import router as tenants_router
from .leases import router as leases_router
from .invoices import router as invoices_router
from .payments import router as payments_router
from .expenses import router as expenses_router
from .late_fees import router as late_fees_router
from .reports import router as reports_router
from .notices import router as notices_router
from .rent import router as rent_router
from .allocations import router as allocations_router

all_routers = [
     properties_router,
     tenants_router,
     leases_router,
     invoices_router,
     payments_router,
     expenses_router,
     late_fees_router,
     reports_router,
     notices_router,
     rent_router,
     allocations_router,
]

__all__ = ["all_routers"]
