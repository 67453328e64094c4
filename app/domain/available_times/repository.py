"""Available time repository - Database operations for configured time slots"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import AvailableTime


class AvailableTimeRepository:
    @staticmethod
    def get_times(db: Session) -> list[AvailableTime]:
        return (
            db.query(AvailableTime)
            .filter(AvailableTime.is_active == True)  # noqa: E712
            .order_by(AvailableTime.branch_id, AvailableTime.time)
            .all()
        )

    @staticmethod
    def get_time_by_id(db: Session, time_id: int) -> Optional[AvailableTime]:
        return db.query(AvailableTime).filter(AvailableTime.id == time_id).first()

    @staticmethod
    def get_times_by_branch(db: Session, branch_id: int) -> list[AvailableTime]:
        return (
            db.query(AvailableTime)
            .filter(AvailableTime.branch_id == branch_id, AvailableTime.is_active == True)  # noqa: E712
            .order_by(AvailableTime.time)
            .all()
        )

    @staticmethod
    def get_times_by_type(db: Session, appointment_type_id: int) -> list[AvailableTime]:
        return (
            db.query(AvailableTime)
            .filter(
                AvailableTime.appointment_type_id == appointment_type_id,
                AvailableTime.is_active == True,  # noqa: E712
            )
            .order_by(AvailableTime.branch_id, AvailableTime.time)
            .all()
        )

    @staticmethod
    def exists(db: Session, branch_id: int, time: str, appointment_type_id: Optional[int]) -> bool:
        query = db.query(AvailableTime).filter(
            AvailableTime.branch_id == branch_id,
            AvailableTime.time == time,
            AvailableTime.is_active == True,  # noqa: E712
        )
        if appointment_type_id is None:
            query = query.filter(AvailableTime.appointment_type_id.is_(None))
        else:
            query = query.filter(AvailableTime.appointment_type_id == appointment_type_id)
        return db.query(query.exists()).scalar()

    @staticmethod
    def add_all(db: Session, times: list[AvailableTime]) -> list[AvailableTime]:
        db.add_all(times)
        db.commit()
        for slot in times:
            db.refresh(slot)
        return times

    @staticmethod
    def save(db: Session, slot: AvailableTime) -> AvailableTime:
        db.commit()
        db.refresh(slot)
        return slot
