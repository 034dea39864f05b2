"""Dashboard module listing and navigation checks."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from retail_pos.core.deps import get_current_user
from retail_pos.db.base import get_db
from retail_pos.schemas.auth import CurrentUser
from retail_pos.schemas.navigation import ModuleListResponse
from retail_pos.services.auth_bridge import AuthBridge
from retail_pos.services.navigation import DASHBOARDS, ModuleNavigator

router = APIRouter(prefix="/modules", tags=["modules"])


@router.get("/{dashboard}", response_model=ModuleListResponse)
async def list_modules(
    dashboard: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Modules on ``dashboard`` the user's current role may open.

    The role is read from the users table so that role changes apply
    without signing in again.
    """
    if dashboard not in DASHBOARDS:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown dashboard: {dashboard}",
        )

    role = await AuthBridge(db).resolve_role(current_user.id)
    navigator = ModuleNavigator(role)
    return ModuleListResponse(
        dashboard=dashboard,
        role=role,
        role_resolved=navigator.role_resolved,
        modules=navigator.visible_modules(dashboard),
        should_leave=navigator.should_leave(dashboard),
    )


@router.post("/{module_id}/open", status_code=status.HTTP_204_NO_CONTENT)
async def open_module(
    module_id: str,
    current_user: CurrentUser = Depends(get_current_user),
):
    """204 when the user may open ``module_id``, 403 otherwise."""
    if not ModuleNavigator(current_user.role).navigate(module_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"No access to module '{module_id}'",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
