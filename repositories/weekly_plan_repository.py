"""
Weekly Plan Repository - Data access layer for weekly meal plans
"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import WeeklyPlan


class WeeklyPlanRepository(BaseRepository[WeeklyPlan]):
    """Repository for weekly plan data access"""

    def __init__(self, db: Session):
        super().__init__(db, WeeklyPlan)

    def get_by_user_and_week(self, user_id: str, week_start_date: date) -> Optional[WeeklyPlan]:
        return (
            self.db.query(WeeklyPlan)
            .filter(
                WeeklyPlan.user_id == user_id,
                WeeklyPlan.week_start_date == week_start_date,
            )
            .first()
        )

    def get_by_id_and_user(self, plan_id: UUID, user_id: str) -> Optional[WeeklyPlan]:
        """Get plan by ID for specific user (authorization check)"""
        return (
            self.db.query(WeeklyPlan)
            .filter(WeeklyPlan.plan_id == plan_id, WeeklyPlan.user_id == user_id)
            .first()
        )

    def list_by_user(self, user_id: str) -> List[WeeklyPlan]:
        """User's plans, most recent week first"""
        return (
            self.db.query(WeeklyPlan)
            .filter(WeeklyPlan.user_id == user_id)
            .order_by(WeeklyPlan.week_start_date.desc())
            .all()
        )
