"""Notification service - In-app notifications and message templates"""

import json
import logging

from fastapi import BackgroundTasks, HTTPException
from sqlalchemy.orm import Session

from ...hub import send_notification_to_user
from ...models import Notification, NotificationTemplate, User
from .repository import NotificationRepository, TemplateRepository
from .schemas import NotificationCreate, TemplateCreate, TemplateUpdate

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = NotificationRepository()

    def get_user_notifications(self, user_id: int, unread_only: bool = False) -> list[Notification]:
        return self.repo.get_by_user(self.db, user_id, unread_only)

    def get_unread_count(self, user_id: int) -> int:
        return self.repo.count_unread(self.db, user_id)

    def mark_as_read(self, notification_id: int, user: User) -> Notification:
        notification = self.repo.get_notification_by_id(self.db, notification_id)
        if not notification or notification.user_id != user.id:
            raise HTTPException(status_code=404, detail="Notification not found")
        notification.mark_as_read()
        return self.repo.save(self.db, notification)

    def create_notification(self, data: NotificationCreate, background_tasks: BackgroundTasks) -> Notification:
        """Store an IN_APP notification and push it to the user's hub group"""
        if not self.db.query(User).filter(User.id == data.user_id).first():
            raise HTTPException(status_code=404, detail="User not found")

        notification = Notification.create(
            type="IN_APP",
            title=data.title,
            message=data.message,
            user_id=data.user_id,
            appointment_id=data.appointment_id,
        )
        notification.mark_as_sent()
        created = self.repo.add(self.db, notification)

        background_tasks.add_task(
            send_notification_to_user,
            created.user_id,
            {
                "id": created.id,
                "type": created.type,
                "title": created.title,
                "message": created.message,
                "appointmentId": created.appointment_id,
                "createdAt": created.created_at.isoformat() if created.created_at else None,
            },
        )
        logger.info(f"🔔 Notification {created.id} created for user {created.user_id}")
        return created


def template_to_dict(template: NotificationTemplate) -> dict:
    return {
        "id": template.id,
        "template_code": template.template_code,
        "template_name": template.template_name,
        "template_type": template.template_type,
        "subject": template.subject,
        "body_template": template.body_template,
        "placeholders": template.placeholder_list,
        "is_active": template.is_active,
        "created_at": template.created_at,
        "updated_at": template.updated_at,
    }


class TemplateService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = TemplateRepository()

    def get_templates(self) -> list[NotificationTemplate]:
        return self.repo.get_templates(self.db)

    def get_template(self, template_id: int) -> NotificationTemplate:
        template = self.repo.get_template_by_id(self.db, template_id)
        if not template:
            raise HTTPException(status_code=404, detail="Template not found")
        return template

    def get_template_by_code(self, code: str) -> NotificationTemplate:
        template = self.repo.get_template_by_code(self.db, code)
        if not template:
            raise HTTPException(status_code=404, detail="Template not found")
        return template

    def create_template(self, data: TemplateCreate) -> NotificationTemplate:
        if self.repo.get_template_by_code(self.db, data.template_code):
            raise HTTPException(status_code=400, detail="A template with this code already exists")
        template = NotificationTemplate.create(
            template_code=data.template_code,
            template_name=data.template_name,
            template_type=data.template_type,
            body_template=data.body_template,
            subject=data.subject,
            placeholders=data.placeholders,
        )
        created = self.repo.add(self.db, template)
        logger.info(f"✅ Template {created.template_code} created")
        return created

    def update_template(self, template_id: int, data: TemplateUpdate) -> NotificationTemplate:
        template = self.get_template(template_id)
        updates = data.model_dump(exclude_unset=True)

        if "body_template" in updates and not (updates["body_template"] or "").strip():
            raise HTTPException(status_code=400, detail="Template body is required")
        if "placeholders" in updates:
            placeholders = updates.pop("placeholders")
            template.placeholders = json.dumps(placeholders) if placeholders else None
        for key, value in updates.items():
            if value is not None:
                setattr(template, key, value)
        return self.repo.save(self.db, template)

    def delete_template(self, template_id: int) -> dict:
        self.repo.delete_template(self.db, self.get_template(template_id))
        return {"message": "Template deleted successfully"}

    def preview(self, code: str, values: dict) -> dict:
        template = self.get_template_by_code(code)
        return {
            "template_code": template.template_code,
            "subject": template.render_subject(values),
            "body": template.render(values),
        }
