"""Holiday repository - Database operations for holidays"""

from datetime import date
from typing import Optional

from sqlalchemy import extract
from sqlalchemy.orm import Session

from ...models import Holiday


class HolidayRepository:
    """Repository for holiday database operations"""

    @staticmethod
    def get_holidays(db: Session, year: Optional[int] = None) -> list[Holiday]:
        query = db.query(Holiday)
        if year:
            query = query.filter(extract("year", Holiday.holiday_date) == year)
        return query.order_by(Holiday.holiday_date).all()

    @staticmethod
    def get_holiday_by_id(db: Session, holiday_id: int) -> Optional[Holiday]:
        return db.query(Holiday).filter(Holiday.id == holiday_id).first()

    @staticmethod
    def get_holidays_in_range(db: Session, start: date, end: date) -> list[Holiday]:
        return (
            db.query(Holiday)
            .filter(
                Holiday.holiday_date >= start,
                Holiday.holiday_date <= end,
                Holiday.is_active == True,  # noqa: E712
            )
            .order_by(Holiday.holiday_date)
            .all()
        )

    @staticmethod
    def get_holiday_for_date(db: Session, day: date, branch_id: Optional[int] = None) -> Optional[Holiday]:
        """First active holiday on that date that applies to the branch"""
        holidays = (
            db.query(Holiday)
            .filter(Holiday.holiday_date == day, Holiday.is_active == True)  # noqa: E712
            .all()
        )
        for holiday in holidays:
            if holiday.applies_to_branch(branch_id):
                return holiday
        return None

    @staticmethod
    def exists_for_scope(
        db: Session,
        day: date,
        branch_id: Optional[int],
        exclude_id: Optional[int] = None,
    ) -> bool:
        """Another active holiday on the same date for the same branch scope"""
        query = db.query(Holiday).filter(
            Holiday.holiday_date == day,
            Holiday.is_active == True,  # noqa: E712
        )
        if branch_id is None:
            query = query.filter(Holiday.branch_id.is_(None))
        else:
            query = query.filter(Holiday.branch_id == branch_id)
        if exclude_id is not None:
            query = query.filter(Holiday.id != exclude_id)
        return db.query(query.exists()).scalar()

    @staticmethod
    def create_holiday(db: Session, holiday: Holiday) -> Holiday:
        db.add(holiday)
        db.commit()
        db.refresh(holiday)
        return holiday

    @staticmethod
    def save(db: Session, holiday: Holiday) -> Holiday:
        db.commit()
        db.refresh(holiday)
        return holiday

    @staticmethod
    def delete_holiday(db: Session, holiday: Holiday) -> None:
        db.delete(holiday)
        db.commit()
