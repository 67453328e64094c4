"""Settings router - System settings and theme endpoints"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import require_permission
from ...database import get_db
from .schemas import (
    SettingValueUpdate,
    SystemSettingCreate,
    SystemSettingResponse,
    SystemSettingUpdate,
    ThemeReplace,
    ThemeResponse,
    ThemeUpdate,
)
from .service import SystemSettingService, ThemeService, mask_setting

router = APIRouter(prefix="/api/v1/system-settings", tags=["System Settings"])
theme_router = APIRouter(prefix="/api/v1/theme", tags=["Theme"])


def get_setting_service(db: Session = Depends(get_db)) -> SystemSettingService:
    """Dependency injection for SystemSettingService"""
    return SystemSettingService(db)


def get_theme_service(db: Session = Depends(get_db)) -> ThemeService:
    """Dependency injection for ThemeService"""
    return ThemeService(db)


# ============================================================================
# SYSTEM SETTINGS
# ============================================================================


@router.get("", response_model=list[SystemSettingResponse], dependencies=[Depends(require_permission("settings.read"))])
async def get_settings(service: SystemSettingService = Depends(get_setting_service)):
    return [mask_setting(s) for s in service.get_settings()]


@router.get("/{setting_key}", response_model=SystemSettingResponse, dependencies=[Depends(require_permission("settings.read"))])
async def get_setting(setting_key: str, service: SystemSettingService = Depends(get_setting_service)):
    return mask_setting(service.get_setting(setting_key))


@router.post("", response_model=SystemSettingResponse, status_code=201, dependencies=[Depends(require_permission("settings.create"))])
async def create_setting(data: SystemSettingCreate, service: SystemSettingService = Depends(get_setting_service)):
    return mask_setting(service.create_setting(data))


@router.patch("/value", response_model=SystemSettingResponse, dependencies=[Depends(require_permission("settings.update"))])
async def update_setting_value(data: SettingValueUpdate, service: SystemSettingService = Depends(get_setting_service)):
    return mask_setting(service.update_value(data))


@router.put("/{setting_key}", response_model=SystemSettingResponse, dependencies=[Depends(require_permission("settings.update"))])
async def update_setting(
    setting_key: str,
    data: SystemSettingUpdate,
    service: SystemSettingService = Depends(get_setting_service),
):
    return mask_setting(service.update_setting(setting_key, data))


# ============================================================================
# THEME
# ============================================================================


@theme_router.get("/active", response_model=ThemeResponse)
async def get_active_theme(service: ThemeService = Depends(get_theme_service)):
    """Active theme colours (public, used by the login screen)"""
    return service.get_active_theme()


@theme_router.put("/{theme_id}", response_model=ThemeResponse, dependencies=[Depends(require_permission("settings.update"))])
async def replace_theme(theme_id: int, data: ThemeReplace, service: ThemeService = Depends(get_theme_service)):
    return service.replace_theme(theme_id, data)


@theme_router.patch("/{theme_id}", response_model=ThemeResponse, dependencies=[Depends(require_permission("settings.update"))])
async def update_theme(theme_id: int, data: ThemeUpdate, service: ThemeService = Depends(get_theme_service)):
    return service.update_theme(theme_id, data)
