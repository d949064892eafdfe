"""
SQLAlchemy models for Weight Tracker database tables.
"""
from sqlalchemy import Column, Integer, String, Float, Date, ForeignKey, DateTime, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from .database import Base


class User(Base):
    """User model matching the 'users' table."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False)
    password = Column(String(100), nullable=False)  # bcrypt hash
    name = Column(String(100), nullable=False)
    goal_weight = Column(Float, nullable=True)  # in kg
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    weights = relationship("Weight", back_populates="user", cascade="all, delete-orphan")
    measurements = relationship("Measurement", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username})>"


class Weight(Base):
    """Weight model matching the 'weights' table. One entry per user and day."""
    __tablename__ = "weights"
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_weights_user_date"),
        Index("idx_weights_user_date", "user_id", "date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    date = Column(Date, nullable=False)
    weight = Column(Float, nullable=False)  # in kg
    notes = Column(String)  # optional
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    user = relationship("User", back_populates="weights")

    def __repr__(self):
        return f"<Weight(id={self.id}, user_id={self.user_id}, weight={self.weight})>"


class Measurement(Base):
    """Body measurements in cm, matching the 'measurements' table."""
    __tablename__ = "measurements"
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_measurements_user_date"),
        Index("idx_measurements_user_date", "user_id", "date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    date = Column(Date, nullable=False)
    chest = Column(Float)
    waist = Column(Float)
    hips = Column(Float)
    thigh = Column(Float)
    arm = Column(Float)
    notes = Column(String)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    user = relationship("User", back_populates="measurements")

    def __repr__(self):
        return f"<Measurement(id={self.id}, user_id={self.user_id}, date={self.date})>"
