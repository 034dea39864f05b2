"""Dashboard module catalogues and role-filtered navigation."""

import logging
from collections.abc import Callable

from retail_pos.core.access import Role, has_module_access
from retail_pos.schemas.navigation import DashboardModule

logger = logging.getLogger(__name__)


def _m(id: str, title: str, description: str) -> DashboardModule:
    return DashboardModule(id=id, title=title, description=description)


DASHBOARDS: dict[str, tuple[DashboardModule, ...]] = {
    "main": (
        _m("inventory", "Inventory Management", "Manage your products, stock levels, and inventory tracking"),
        _m("sales", "Sales Dashboard", "Process sales, manage transactions, and view sales analytics"),
        _m("purchase", "Purchase Management", "Handle supplier orders, track purchases, and manage vendors"),
        _m("finance", "Financial Management", "Manage expenses, debts, and financial reporting"),
        _m("customers", "Customer Management", "Manage customer information and loyalty programs"),
        _m("suppliers", "Supplier Management", "Manage supplier information and vendor relationships"),
        _m("employees", "Employee Management", "Manage staff members and permissions"),
        _m("expenses", "Expense Tracking", "Track business expenses and categorize spending"),
        _m("returns", "Returns Management", "Process product returns and refunds"),
        _m("debts", "Debt Management", "Track customer debts and payment schedules"),
        _m("reports", "Financial Reports", "View detailed financial reports and statements"),
        _m("access-logs", "Access Logs", "Monitor user activity and system access"),
        _m("settings", "System Settings", "Configure POS system preferences and options"),
        _m("scanner", "Scan Items", "Quickly add products using barcode scanner"),
        _m("automated", "Automated Dashboard", "View automated business insights and recommendations"),
    ),
    "sales": (
        _m("sales-cart", "Sales Terminal", "Process new sales and manage the cart"),
        _m("sales-orders", "Sales Orders", "Create and track customer sales orders"),
        _m("products", "Product Management", "Add, edit and price products"),
        _m("customer-stock", "Customer Stock", "Track stock held on behalf of customers"),
        _m("monetary-assets", "Monetary Assets", "Track cash and other monetary assets"),
        _m("customers", "Customer Management", "Manage customer information and loyalty programs"),
        _m("returns", "Returns Management", "Process product returns and refunds"),
        _m("discounts", "Discount Management", "Configure discounts and promotions"),
        _m("debts", "Debt Management", "Track customer debts and payment schedules"),
        _m("customer-settlements", "Customer Settlements", "Record payments against customer balances"),
        _m("settings", "Sales Settings", "Configure sales preferences"),
        _m("scanner", "Scan Items", "Quickly add products using barcode scanner"),
    ),
    "purchase": (
        _m("purchase-terminal", "Purchase Terminal", "Record purchases from suppliers"),
        _m("purchase-orders", "Purchase Orders", "Create and track supplier orders"),
        _m("suppliers", "Supplier Management", "Manage supplier information and vendor relationships"),
        _m("products", "Product Management", "Add, edit and price products"),
        _m("purchase-transactions", "Transaction History", "Review past purchase transactions"),
        _m("purchase-reports", "Purchase Reports", "Analyse purchasing activity"),
        _m("supplier-settlements", "Supplier Settlements", "Record payments against supplier balances"),
        _m("settings", "Purchase Settings", "Configure purchasing preferences"),
    ),
    "finance": (
        _m("expenses", "Expense Management", "Track business expenses and categorize spending"),
        _m("debts", "Debt Management", "Track customer debts and payment schedules"),
        _m("customer-settlements", "Customer Settlements", "Record payments against customer balances"),
        _m("supplier-settlements", "Supplier Settlements", "Record payments against supplier balances"),
        _m("payables-receivables", "Payables & Receivables", "Monitor money owed and owing"),
        _m("assets", "Assets Management", "Register and manage business assets"),
        _m("capital", "Capital Management", "Track owner capital and contributions"),
        _m("reports", "Financial Reports", "View detailed financial reports and statements"),
        _m("financial-statements", "Financial Statements", "Income statement and balance reports"),
        _m("settings", "Financial Settings", "Configure financial preferences"),
        _m("automated", "Automated Dashboard", "View automated business insights and recommendations"),
    ),
    "comprehensive": (
        _m("inventory", "Inventory Management", "Manage your products, stock levels, and inventory tracking"),
        _m("sales", "Sales Terminal", "Process sales and manage transactions"),
        _m("purchase", "Purchase Management", "Handle supplier orders, track purchases, and manage vendors"),
        _m("finance", "Financial Management", "Manage expenses, debts, and financial reporting"),
        _m("customers", "Customer Management", "Manage customer information and loyalty programs"),
        _m("suppliers", "Supplier Management", "Manage supplier information and vendor relationships"),
        _m("employees", "Employee Management", "Manage staff members and permissions"),
        _m("expenses", "Expense Tracking", "Track business expenses and categorize spending"),
        _m("returns", "Return Management", "Process product returns and refunds"),
        _m("debts", "Debt Management", "Track customer debts and payment schedules"),
        _m("customer-settlements", "Customer Settlements", "Record payments against customer balances"),
        _m("supplier-settlements", "Supplier Settlements", "Record payments against supplier balances"),
        _m("reports", "Reports & Analytics", "View detailed reports and statements"),
        _m("access-logs", "Access Logs", "Monitor user activity and system access"),
        _m("settings", "System Settings", "Configure POS system preferences and options"),
        _m("scanner", "Scan Items", "Quickly add products using barcode scanner"),
        _m("automated", "Automated Dashboard", "View automated business insights and recommendations"),
        _m("assets", "Assets Management", "Register and manage business assets"),
        _m("templates", "Business Templates", "Invoices, receipts and other business documents"),
    ),
}


class ModuleNavigator:
    """Filters dashboard tiles by role and guards navigation.

    ``role=None`` means the role is still being resolved; callers should
    show a loading state rather than "no access" until it is set.
    """

    def __init__(self, role: Role | str | None, on_navigate: Callable[[str], None] | None = None):
        self.role = role
        self._on_navigate = on_navigate

    @property
    def role_resolved(self) -> bool:
        return self.role is not None

    def visible_modules(self, dashboard: str) -> list[DashboardModule]:
        """Modules of ``dashboard`` the role may open. Raises KeyError for unknown dashboards."""
        return [module for module in DASHBOARDS[dashboard] if has_module_access(self.role, module.id)]

    def should_leave(self, dashboard: str) -> bool:
        """True once the role is known and nothing on ``dashboard`` is accessible."""
        return self.role_resolved and not self.visible_modules(dashboard)

    def navigate(self, module_id: str) -> bool:
        if not has_module_access(self.role, module_id):
            logger.info("Role %s does not have access to module %s", self.role, module_id)
            return False
        if self._on_navigate is not None:
            self._on_navigate(module_id)
        return True
