from retail_pos.schemas.auth import (
    SignInRequest, SignUpRequest, UserProfile, UserResponse, SessionResponse, CurrentUser,
)
from retail_pos.schemas.imports import ValidationResult, ImportRequest, ImportReport
from retail_pos.schemas.messaging import (
    SaleAlertRequest, SaleAlertResponse, ReceiptMessageResponse, LanguagePreference,
)
from retail_pos.schemas.navigation import DashboardModule, ModuleListResponse

__all__ = [
    "SignInRequest", "SignUpRequest", "UserProfile", "UserResponse", "SessionResponse", "CurrentUser",
    "ValidationResult", "ImportRequest", "ImportReport",
    "SaleAlertRequest", "SaleAlertResponse", "ReceiptMessageResponse", "LanguagePreference",
    "DashboardModule", "ModuleListResponse",
]
