"""
Weekly meal plan model.
"""

import uuid

from sqlalchemy import Column, Text, Date, DateTime, JSON, Uuid, UniqueConstraint

from domain.models.database import Base, utcnow


class WeeklyPlan(Base):
    """
    A user's plan for one week (Monday..Sunday).

    ``days`` always holds seven entries ``{"day_of_week": 0..6, "recipe_id": str | None}``,
    Monday being day 0. The list is replaced as a whole on every write.
    """

    __tablename__ = "weekly_plan"

    plan_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    week_start_date = Column(Date, nullable=False)
    days = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    __table_args__ = (
        UniqueConstraint("user_id", "week_start_date", name="uq_weekly_plan_user_week"),
    )
