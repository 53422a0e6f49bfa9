"""
Recipe-related models.
"""

import uuid

from sqlalchemy import (
    Column,
    Text,
    Integer,
    Boolean,
    DateTime,
    ForeignKey,
    JSON,
    Uuid,
    Enum as SQLEnum,
    Index,
)
from sqlalchemy.orm import relationship

from domain.enums import StepType
from domain.models.database import Base, utcnow


class Recipe(Base):
    """A user's recipe; optionally shared publicly under a unique slug"""

    __tablename__ = "recipe"

    recipe_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text)
    cuisine = Column(JSON, nullable=False, default=list)
    skill_level = Column(Text, nullable=False)
    cook_time = Column(Integer, nullable=False, default=0)  # minutes
    prep_time = Column(Integer, nullable=False, default=0)  # minutes
    cost = Column(Text, nullable=False)
    can_freeze = Column(Boolean, nullable=False, default=False)
    can_reheat = Column(Boolean, nullable=False, default=False)
    servings = Column(Integer, nullable=False, default=1)
    slug = Column(Text, unique=True)
    is_public = Column(Boolean, nullable=False, default=False)
    image_storage_id = Column(Uuid)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    ingredients = relationship(
        "Ingredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="Ingredient.order",
    )
    steps = relationship(
        "RecipeStep",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeStep.order",
    )

    __table_args__ = (Index("ix_recipe_user_created", "user_id", "created_at"),)


class Ingredient(Base):
    """Ingredient line of a recipe; amount is free text and may be empty"""

    __tablename__ = "ingredient"

    ingredient_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    recipe_id = Column(
        Uuid,
        ForeignKey("recipe.recipe_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(Text, nullable=False)
    amount = Column(Text, nullable=False, default="")
    order = Column("sort_order", Integer, nullable=False)

    recipe = relationship("Recipe", back_populates="ingredients")


class RecipeStep(Base):
    """Preparation or cooking step of a recipe"""

    __tablename__ = "recipe_step"

    step_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    recipe_id = Column(
        Uuid,
        ForeignKey("recipe.recipe_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type = Column(
        SQLEnum(
            StepType,
            name="step_type",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
        default=StepType.COOKING,
    )
    step_number = Column(Integer, nullable=False)
    instruction = Column(Text, nullable=False)
    order = Column("sort_order", Integer, nullable=False)

    recipe = relationship("Recipe", back_populates="steps")
