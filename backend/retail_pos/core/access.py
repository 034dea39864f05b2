"""Role → module access table.

Every dashboard tile and every module-scoped endpoint is gated through
``has_module_access``. The table is built once at import time and cannot be
mutated afterwards.

Matrix (✓ = role may open the module):
┌──────────────────────────┬───────┬─────────┬─────────┬───────┐
│ Module                   │ Admin │ Manager │ Cashier │ Staff │
├──────────────────────────┼───────┼─────────┼─────────┼───────┤
│ sales, sales-cart,       │  ✓    │   ✓     │   ✓     │       │
│ sales-orders, scanner,   │       │         │         │       │
│ transactions, discounts  │       │         │         │       │
│ customers, products      │  ✓    │   ✓     │   ✓     │  ✓    │
│ capital, assets,         │  ✓    │   ✓     │   ✓     │  ✓    │
│ templates                │       │         │         │       │
│ inventory                │  ✓    │   ✓     │         │  ✓    │
│ test-data                │  ✓    │   ✓     │   ✓     │       │
│ employees                │  ✓    │         │         │       │
│ everything else below    │  ✓    │   ✓     │         │       │
└──────────────────────────┴───────┴─────────┴─────────┴───────┘
"""

import enum
from types import MappingProxyType
from typing import Mapping


class Role(str, enum.Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    CASHIER = "cashier"
    STAFF = "staff"


DEFAULT_ROLE = Role.CASHIER

# Modules shared by admin and manager; admin additionally gets "employees".
_BACK_OFFICE_MODULES = (
    "sales", "inventory", "customers", "suppliers", "purchase", "finance",
    "expenses", "returns", "debts", "discounts", "audit",
    "reports", "access-logs", "settings", "scanner", "automated",
    "customer-settlements", "supplier-settlements", "payables-receivables", "transactions",
    "sales-cart", "sales-orders", "products", "test-data",
    "customer-stock", "monetary-assets",
    "financial-statements", "purchase-orders", "purchase-terminal",
    "purchase-transactions", "purchase-reports", "spending-analytics",
    "statements-reports", "financial-reports", "income-statement",
    "assets", "capital",
    "purchase-assets", "sell-assets", "dispose-assets", "adjust-assets",
    "templates",
)

ROLE_MODULES: Mapping[str, frozenset[str]] = MappingProxyType({
    Role.ADMIN.value: frozenset(_BACK_OFFICE_MODULES + ("employees",)),
    Role.MANAGER.value: frozenset(_BACK_OFFICE_MODULES),
    Role.CASHIER.value: frozenset({
        "sales", "customers", "products", "transactions", "discounts", "scanner",
        "sales-cart", "sales-orders", "test-data", "capital",
        "assets", "templates",
    }),
    Role.STAFF.value: frozenset({
        "inventory", "customers", "products", "capital",
        "assets", "templates",
    }),
})


def _role_key(role: "Role | str | None") -> str | None:
    if isinstance(role, Role):
        return role.value
    return role or None


def modules_for_role(role: "Role | str | None") -> frozenset[str]:
    """Return the modules a role may open; unknown or missing roles get nothing."""
    key = _role_key(role)
    if key is None:
        return frozenset()
    return ROLE_MODULES.get(key, frozenset())


def has_module_access(role: "Role | str | None", module: str) -> bool:
    """Deny-by-default membership check of ``module`` in the role's module set."""
    return module in modules_for_role(role)
