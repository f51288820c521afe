"""Group and membership models."""

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.enums import BudgetApproach, GroupRole
from src.models.mixins import TimestampMixin, utc_now


class Group(Base, TimestampMixin):
    """Gift-giving group with an optional budget configuration."""

    __tablename__ = "groups"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    budget_approach = Column(
        Enum(
            BudgetApproach,
            name="budgetapproach",
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=True,
    )
    budget_amount = Column(Integer, nullable=True)  # cents

    # Relationships
    members = relationship("GroupMember", back_populates="group", cascade="all, delete-orphan")


class GroupMember(Base):
    """Membership of a user in a group."""

    __tablename__ = "group_members"
    __table_args__ = (UniqueConstraint("group_id", "user_id", name="uq_group_members_group_user"),)

    id = Column(Integer, primary_key=True, index=True)
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    role = Column(String(20), default=GroupRole.MEMBER.value)  # 'admin', 'member'
    joined_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    # Relationships
    group = relationship("Group", back_populates="members")
    user = relationship("User", backref="group_memberships")
