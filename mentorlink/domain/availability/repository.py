"""Availability repository - Database operations for weekly windows"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Availability


class AvailabilityRepository:
    """Repository for availability database operations"""

    @staticmethod
    def list_for_mentor(db: Session, mentor_id: str) -> list[Availability]:
        """Windows for a mentor ordered by day, then start time"""
        return (
            db.query(Availability)
            .filter(Availability.mentor_id == mentor_id)
            .order_by(Availability.day_of_week, Availability.start_time)
            .all()
        )

    @staticmethod
    def list_all(db: Session) -> list[Availability]:
        return db.query(Availability).all()

    @staticmethod
    def get_by_id(db: Session, availability_id: str) -> Optional[Availability]:
        return db.query(Availability).filter(Availability.id == availability_id).first()

    @staticmethod
    def create_window(db: Session, mentor_id: str, **window_data) -> Availability:
        window = Availability(mentor_id=mentor_id, **window_data)
        db.add(window)
        db.commit()
        db.refresh(window)
        return window

    @staticmethod
    def delete_window(db: Session, window: Availability) -> None:
        db.delete(window)
        db.commit()
