"""Catalog repository - Shared queries for the code/name lookup tables"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session


class CatalogRepository:
    """Queries parameterised by the catalogue model (PropertyType, ServiceUseType, ProjectType)"""

    @staticmethod
    def get_all(db: Session, model) -> list:
        return (
            db.query(model)
            .filter(model.is_active == True)  # noqa: E712
            .order_by(model.display_order, model.name)
            .all()
        )

    @staticmethod
    def get_by_id(db: Session, model, item_id: int) -> Optional[object]:
        return db.query(model).filter(model.id == item_id).first()

    @staticmethod
    def get_by_code(db: Session, model, code: str) -> Optional[object]:
        return db.query(model).filter(func.upper(model.code) == code.strip().upper()).first()
