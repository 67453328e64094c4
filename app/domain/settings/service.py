"""Settings service - System settings and theme business logic"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...cache import (
    THEME_CACHE_KEY,
    cache,
    invalidate_setting_cache,
    invalidate_theme_cache,
    setting_cache_key,
)
from ...models import SystemSetting, ThemeSettings
from ...security_utils import decrypt_value, encrypt_value
from ...shared.exceptions import NotFoundException
from .repository import SystemSettingRepository, ThemeRepository
from .schemas import (
    SettingValueUpdate,
    SystemSettingCreate,
    SystemSettingUpdate,
    ThemeReplace,
    ThemeUpdate,
)

logger = logging.getLogger(__name__)

SETTING_CACHE_TTL = 300  # 5 minutes
THEME_CACHE_TTL = 3600
MASKED_VALUE = "********"


# ==========================================
# Typed lookups used by other services
# ==========================================


def get_setting_value(db: Session, setting_key: str) -> Optional[str]:
    """Plain (decrypted) value of an active setting, None when missing"""
    key = setting_cache_key(setting_key)
    cached_value = cache.get(key)
    if cached_value is not None:
        return cached_value.get("value")

    setting = SystemSettingRepository.get_setting_by_key(db, setting_key)
    if not setting or not setting.is_active:
        return None

    value = setting.setting_value
    if setting.is_encrypted and value:
        value = decrypt_value(value)
    else:
        # Encrypted values are never written to Redis
        cache.set(key, {"value": value}, SETTING_CACHE_TTL)
    return value


def get_int_setting(db: Session, setting_key: str, default: int) -> int:
    return SystemSetting(setting_value=get_setting_value(db, setting_key)).get_int(default)


def get_bool_setting(db: Session, setting_key: str, default: bool) -> bool:
    return SystemSetting(setting_value=get_setting_value(db, setting_key)).get_bool(default)


def mask_setting(setting: SystemSetting) -> dict:
    return {
        "id": setting.id,
        "setting_key": setting.setting_key,
        "setting_value": MASKED_VALUE if setting.is_encrypted and setting.setting_value else setting.setting_value,
        "setting_type": setting.setting_type,
        "description": setting.description,
        "is_encrypted": setting.is_encrypted,
        "is_active": setting.is_active,
        "updated_at": setting.updated_at,
    }


class SystemSettingService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = SystemSettingRepository()

    def get_settings(self) -> list[SystemSetting]:
        return self.repo.get_settings(self.db)

    def get_setting(self, setting_key: str) -> SystemSetting:
        setting = self.repo.get_setting_by_key(self.db, setting_key)
        if not setting:
            raise NotFoundException(f"Setting '{setting_key.upper()}' not found")
        return setting

    def _store_value(self, setting: SystemSetting, value: Optional[str]) -> None:
        if value is not None and setting.is_encrypted:
            value = encrypt_value(value)
        setting.setting_value = value

    def create_setting(self, data: SystemSettingCreate) -> SystemSetting:
        if self.repo.get_setting_by_key(self.db, data.setting_key):
            raise HTTPException(status_code=400, detail="A setting with this key already exists")

        setting = SystemSetting.create(
            setting_key=data.setting_key,
            setting_value=None,
            setting_type=data.setting_type,
            description=data.description,
            is_encrypted=data.is_encrypted,
        )
        self._store_value(setting, data.setting_value)
        created = self.repo.add(self.db, setting)
        invalidate_setting_cache(created.setting_key)
        logger.info(f"✅ Setting {created.setting_key} created")
        return created

    def update_setting(self, setting_key: str, data: SystemSettingUpdate) -> SystemSetting:
        setting = self.get_setting(setting_key)
        if data.setting_type is not None:
            # Reuse the factory validation for the type
            setting.setting_type = SystemSetting.create(setting.setting_key, None, data.setting_type).setting_type
        if data.description is not None:
            setting.description = data.description
        if data.is_active is not None:
            setting.is_active = data.is_active
        if data.setting_value is not None:
            self._store_value(setting, data.setting_value)

        saved = self.repo.save(self.db, setting)
        invalidate_setting_cache(saved.setting_key)
        return saved

    def update_value(self, data: SettingValueUpdate) -> SystemSetting:
        setting = self.get_setting(data.setting_key)
        self._store_value(setting, data.setting_value)
        saved = self.repo.save(self.db, setting)
        invalidate_setting_cache(saved.setting_key)
        logger.info(f"🔄 Setting {saved.setting_key} updated")
        return saved


class ThemeService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ThemeRepository()

    def get_active_theme(self) -> dict:
        """Active theme, seeding the default palette when none exists"""
        cached_theme = cache.get(THEME_CACHE_KEY)
        if cached_theme is not None:
            return cached_theme

        theme = self.repo.get_active_theme(self.db)
        if not theme:
            logger.info("🎨 No theme configured, seeding default theme")
            theme = self.repo.add(self.db, ThemeSettings.create_default())

        data = theme.to_dict()
        cache.set(THEME_CACHE_KEY, data, THEME_CACHE_TTL)
        return data

    def get_theme(self, theme_id: int) -> ThemeSettings:
        theme = self.repo.get_theme_by_id(self.db, theme_id)
        if not theme:
            raise HTTPException(status_code=404, detail="Theme not found")
        return theme

    def _apply(self, theme: ThemeSettings, data: ThemeUpdate) -> ThemeSettings:
        values = data.model_dump()
        theme.update_info(values.pop("name", None), values.pop("description", None))
        theme.update_brand_colors(**values)
        theme.update_status_colors(**values)
        theme.update_surface_colors(**values)
        saved = self.repo.save(self.db, theme)
        invalidate_theme_cache()
        logger.info(f"🎨 Theme {theme.id} updated")
        return saved

    def replace_theme(self, theme_id: int, data: ThemeReplace) -> ThemeSettings:
        return self._apply(self.get_theme(theme_id), data)

    def update_theme(self, theme_id: int, data: ThemeUpdate) -> ThemeSettings:
        return self._apply(self.get_theme(theme_id), data)
