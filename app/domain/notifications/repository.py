"""Notification repository - In-app notifications and templates"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Notification, NotificationTemplate


class NotificationRepository:
    @staticmethod
    def get_by_user(db: Session, user_id: int, unread_only: bool = False) -> list[Notification]:
        query = db.query(Notification).filter(Notification.user_id == user_id)
        if unread_only:
            query = query.filter(Notification.is_read == False)  # noqa: E712
        return query.order_by(Notification.created_at.desc(), Notification.id.desc()).all()

    @staticmethod
    def count_unread(db: Session, user_id: int) -> int:
        return (
            db.query(Notification)
            .filter(Notification.user_id == user_id, Notification.is_read == False)  # noqa: E712
            .count()
        )

    @staticmethod
    def get_notification_by_id(db: Session, notification_id: int) -> Optional[Notification]:
        return db.query(Notification).filter(Notification.id == notification_id).first()

    @staticmethod
    def add(db: Session, notification: Notification) -> Notification:
        db.add(notification)
        db.commit()
        db.refresh(notification)
        return notification

    @staticmethod
    def save(db: Session, notification: Notification) -> Notification:
        db.commit()
        db.refresh(notification)
        return notification


class TemplateRepository:
    @staticmethod
    def get_templates(db: Session, include_inactive: bool = False) -> list[NotificationTemplate]:
        query = db.query(NotificationTemplate)
        if not include_inactive:
            query = query.filter(NotificationTemplate.is_active == True)  # noqa: E712
        return query.order_by(NotificationTemplate.template_code).all()

    @staticmethod
    def get_template_by_id(db: Session, template_id: int) -> Optional[NotificationTemplate]:
        return db.query(NotificationTemplate).filter(NotificationTemplate.id == template_id).first()

    @staticmethod
    def get_template_by_code(db: Session, code: str) -> Optional[NotificationTemplate]:
        return (
            db.query(NotificationTemplate)
            .filter(NotificationTemplate.template_code == code.strip().upper())
            .first()
        )

    @staticmethod
    def add(db: Session, template: NotificationTemplate) -> NotificationTemplate:
        db.add(template)
        db.commit()
        db.refresh(template)
        return template

    @staticmethod
    def save(db: Session, template: NotificationTemplate) -> NotificationTemplate:
        db.commit()
        db.refresh(template)
        return template

    @staticmethod
    def delete_template(db: Session, template: NotificationTemplate) -> None:
        db.delete(template)
        db.commit()
