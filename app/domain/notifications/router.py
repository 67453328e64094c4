"""Notification router - In-app notifications and templates"""

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_permission
from ...database import get_db
from ...models import User
from .schemas import (
    NotificationCreate,
    NotificationResponse,
    TemplateCreate,
    TemplatePreviewRequest,
    TemplatePreviewResponse,
    TemplateResponse,
    TemplateUpdate,
    UnreadCountResponse,
)
from .service import NotificationService, TemplateService, template_to_dict

router = APIRouter(prefix="/api/v1/notifications", tags=["Notifications"])
templates_router = APIRouter(prefix="/api/v1/notification-templates", tags=["Notification Templates"])


def get_notification_service(db: Session = Depends(get_db)) -> NotificationService:
    """Dependency injection for NotificationService"""
    return NotificationService(db)


def get_template_service(db: Session = Depends(get_db)) -> TemplateService:
    """Dependency injection for TemplateService"""
    return TemplateService(db)


@router.get("/my-notifications", response_model=list[NotificationResponse])
async def get_my_notifications(
    unread_only: bool = False,
    current_user: User = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service),
):
    return service.get_user_notifications(current_user.id, unread_only)


@router.get("/unread-count", response_model=UnreadCountResponse)
async def get_my_unread_count(
    current_user: User = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service),
):
    return UnreadCountResponse(count=service.get_unread_count(current_user.id))


@router.get(
    "/user/{user_id}",
    response_model=list[NotificationResponse],
    dependencies=[Depends(require_permission("notifications.read"))],
)
async def get_user_notifications(user_id: int, service: NotificationService = Depends(get_notification_service)):
    return service.get_user_notifications(user_id)


@router.get(
    "/user/{user_id}/unread-count",
    response_model=UnreadCountResponse,
    dependencies=[Depends(require_permission("notifications.read"))],
)
async def get_user_unread_count(user_id: int, service: NotificationService = Depends(get_notification_service)):
    return UnreadCountResponse(count=service.get_unread_count(user_id))


@router.patch("/{notification_id}/mark-read", response_model=NotificationResponse)
async def mark_as_read(
    notification_id: int,
    current_user: User = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service),
):
    return service.mark_as_read(notification_id, current_user)


@router.post(
    "",
    response_model=NotificationResponse,
    status_code=201,
    dependencies=[Depends(require_permission("notifications.create"))],
)
async def create_notification(
    data: NotificationCreate,
    background_tasks: BackgroundTasks,
    service: NotificationService = Depends(get_notification_service),
):
    return service.create_notification(data, background_tasks)


# ============================================================================
# TEMPLATES
# ============================================================================


@templates_router.get("", response_model=list[TemplateResponse], dependencies=[Depends(require_permission("notifications.read"))])
async def get_templates(service: TemplateService = Depends(get_template_service)):
    return [template_to_dict(t) for t in service.get_templates()]


@templates_router.get("/code/{code}", response_model=TemplateResponse, dependencies=[Depends(require_permission("notifications.read"))])
async def get_template_by_code(code: str, service: TemplateService = Depends(get_template_service)):
    return template_to_dict(service.get_template_by_code(code))


@templates_router.get("/{template_id}", response_model=TemplateResponse, dependencies=[Depends(require_permission("notifications.read"))])
async def get_template(template_id: int, service: TemplateService = Depends(get_template_service)):
    return template_to_dict(service.get_template(template_id))


@templates_router.post("", response_model=TemplateResponse, status_code=201, dependencies=[Depends(require_permission("notifications.create"))])
async def create_template(data: TemplateCreate, service: TemplateService = Depends(get_template_service)):
    return template_to_dict(service.create_template(data))


@templates_router.put("/{template_id}", response_model=TemplateResponse, dependencies=[Depends(require_permission("notifications.update"))])
async def update_template(template_id: int, data: TemplateUpdate, service: TemplateService = Depends(get_template_service)):
    return template_to_dict(service.update_template(template_id, data))


@templates_router.delete("/{template_id}", dependencies=[Depends(require_permission("notifications.delete"))])
async def delete_template(template_id: int, service: TemplateService = Depends(get_template_service)):
    return service.delete_template(template_id)


@templates_router.post("/{code}/preview", response_model=TemplatePreviewResponse, dependencies=[Depends(require_permission("notifications.read"))])
async def preview_template(
    code: str,
    data: TemplatePreviewRequest,
    service: TemplateService = Depends(get_template_service),
):
    """Render a stored template with sample {{KEY}} values"""
    return service.preview(code, data.values)
