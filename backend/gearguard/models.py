import uuid
from sqlalchemy import (
    Column,
    String,
    DateTime,
    ForeignKey,
    Text,
    Float,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from .database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class Department(Base):
    __tablename__ = "departments"
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    description = Column(Text)
    created_at = Column(DateTime, default=_utcnow)

    users = relationship("User", back_populates="department")
    equipment = relationship("Equipment", back_populates="department")


class User(Base):
    __tablename__ = "users"
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(String, default="employee", nullable=False)
    department_id = Column(
        UUID(as_uuid=True), ForeignKey("departments.id", ondelete="SET NULL"), nullable=True
    )
    created_at = Column(DateTime, default=_utcnow)

    department = relationship("Department", back_populates="users")
    memberships = relationship(
        "TeamMember", back_populates="user", cascade="all, delete-orphan"
    )


class MaintenanceTeam(Base):
    __tablename__ = "maintenance_teams"
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    team_name = Column(String, nullable=False)
    description = Column(Text)
    created_at = Column(DateTime, default=_utcnow)

    members = relationship(
        "TeamMember", back_populates="team", cascade="all, delete-orphan"
    )
    equipment = relationship("Equipment", back_populates="team")
    requests = relationship("MaintenanceRequest", back_populates="team")


class TeamMember(Base):
    __tablename__ = "team_members"
    team_id = Column(
        UUID(as_uuid=True), ForeignKey("maintenance_teams.id", ondelete="CASCADE"), primary_key=True
    )
    user_id = Column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    role = Column(String, default="member", nullable=False)

    user = relationship("User", back_populates="memberships")
    team = relationship("MaintenanceTeam", back_populates="members")


class Equipment(Base):
    __tablename__ = "equipment"
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    # uniqueness is expected but left to the operators
    serial_number = Column(String, nullable=False)
    type = Column(String)
    location = Column(String)
    status = Column(String, default="operational", nullable=False)
    department_id = Column(
        UUID(as_uuid=True), ForeignKey("departments.id", ondelete="SET NULL"), nullable=True
    )
    team_id = Column(
        UUID(as_uuid=True), ForeignKey("maintenance_teams.id", ondelete="SET NULL"), nullable=True
    )
    created_at = Column(DateTime, default=_utcnow)

    department = relationship("Department", back_populates="equipment")
    team = relationship("MaintenanceTeam", back_populates="equipment")
    requests = relationship("MaintenanceRequest", back_populates="equipment")


class MaintenanceRequest(Base):
    __tablename__ = "maintenance_requests"
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    subject = Column(String, nullable=False)
    description = Column(Text)
    type = Column(String, default="corrective", nullable=False)
    priority = Column(String, default="medium", nullable=False)
    stage = Column(String, default="new", nullable=False)
    scheduled_date = Column(DateTime, nullable=True)
    scrap_reason = Column(Text, nullable=True)
    # hours spent on the repair
    duration = Column(Float, nullable=True)
    equipment_id = Column(
        UUID(as_uuid=True), ForeignKey("equipment.id", ondelete="SET NULL"), nullable=True
    )
    team_id = Column(
        UUID(as_uuid=True), ForeignKey("maintenance_teams.id", ondelete="SET NULL"), nullable=True
    )
    created_by = Column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    assigned_to = Column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)

    equipment = relationship("Equipment", back_populates="requests")
    team = relationship("MaintenanceTeam", back_populates="requests")
    creator = relationship("User", foreign_keys=[created_by])
    assignee = relationship("User", foreign_keys=[assigned_to])
