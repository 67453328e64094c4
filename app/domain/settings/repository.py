"""Settings repository - System settings and theme persistence"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import SystemSetting, ThemeSettings


class SystemSettingRepository:
    @staticmethod
    def get_settings(db: Session) -> list[SystemSetting]:
        return db.query(SystemSetting).order_by(SystemSetting.setting_key).all()

    @staticmethod
    def get_setting_by_id(db: Session, setting_id: int) -> Optional[SystemSetting]:
        return db.query(SystemSetting).filter(SystemSetting.id == setting_id).first()

    @staticmethod
    def get_setting_by_key(db: Session, setting_key: str) -> Optional[SystemSetting]:
        return (
            db.query(SystemSetting)
            .filter(SystemSetting.setting_key == setting_key.strip().upper())
            .first()
        )

    @staticmethod
    def add(db: Session, setting: SystemSetting) -> SystemSetting:
        db.add(setting)
        db.commit()
        db.refresh(setting)
        return setting

    @staticmethod
    def save(db: Session, setting: SystemSetting) -> SystemSetting:
        db.commit()
        db.refresh(setting)
        return setting


class ThemeRepository:
    @staticmethod
    def get_theme_by_id(db: Session, theme_id: int) -> Optional[ThemeSettings]:
        return db.query(ThemeSettings).filter(ThemeSettings.id == theme_id).first()

    @staticmethod
    def get_active_theme(db: Session) -> Optional[ThemeSettings]:
        """The active default theme, falling back to any active theme"""
        theme = (
            db.query(ThemeSettings)
            .filter(ThemeSettings.is_default_theme == True, ThemeSettings.is_active == True)  # noqa: E712
            .first()
        )
        if theme:
            return theme
        return db.query(ThemeSettings).filter(ThemeSettings.is_active == True).first()  # noqa: E712

    @staticmethod
    def add(db: Session, theme: ThemeSettings) -> ThemeSettings:
        db.add(theme)
        db.commit()
        db.refresh(theme)
        return theme

    @staticmethod
    def save(db: Session, theme: ThemeSettings) -> ThemeSettings:
        db.commit()
        db.refresh(theme)
        return theme
