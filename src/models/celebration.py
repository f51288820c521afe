"""Celebration and contribution models."""

from sqlalchemy import Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class Celebration(Base, TimestampMixin):
    """An event in a group that members contribute money towards."""

    __tablename__ = "celebrations"

    id = Column(Integer, primary_key=True, index=True)
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=False, index=True)
    celebrant_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    title = Column(String(255), nullable=True)

    # Relationships
    contributions = relationship(
        "Contribution", back_populates="celebration", cascade="all, delete-orphan"
    )


class Contribution(Base, TimestampMixin):
    """A monetary pledge towards a celebration, in dollars."""

    __tablename__ = "celebration_contributions"

    id = Column(Integer, primary_key=True, index=True)
    celebration_id = Column(Integer, ForeignKey("celebrations.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    amount = Column(Numeric(10, 2), nullable=False)

    # Relationships
    celebration = relationship("Celebration", back_populates="contributions")
