"""
Pydantic schemas for request/response validation.
"""
import datetime as dt
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, field_validator


def _empty_to_none(value):
    """Blank strings and zero count as "not provided"."""
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0:
        return None
    return value


# ============ User Schemas ============

class SessionUser(BaseModel):
    """Identity carried by the session cookie and returned by the auth routes."""
    id: int
    username: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class RegisterRequest(BaseModel):
    """Schema for user registration. Presence is checked by the route."""
    username: Optional[str] = Field(None, max_length=50)
    password: Optional[str] = Field(None, max_length=100)
    name: Optional[str] = Field(None, max_length=100)


class LoginRequest(BaseModel):
    """Schema for login request."""
    username: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    user: SessionUser


class SuccessResponse(BaseModel):
    success: bool = True


# ============ Weight Schemas ============

class WeightPayload(BaseModel):
    """Body for creating (upsert) or updating a weight entry."""
    id: Optional[int] = None
    date: Optional[dt.date] = None
    weight: Optional[float] = Field(None, gt=0, le=1000)  # kg
    notes: Optional[str] = None

    @field_validator("date", "weight", "notes", mode="before")
    @classmethod
    def _blank_is_missing(cls, value):
        return _empty_to_none(value)


class WeightEntry(BaseModel):
    """Schema for weight response."""
    id: int
    date: dt.date
    weight: float
    notes: Optional[str] = None
    created_at: Optional[dt.datetime] = None

    model_config = ConfigDict(from_attributes=True)


class WeightList(BaseModel):
    weights: List[WeightEntry]


# ============ Measurement Schemas ============

class MeasurementPayload(BaseModel):
    """Body for creating (upsert) or updating a measurement. All sizes in cm."""
    id: Optional[int] = None
    date: Optional[dt.date] = None
    chest: Optional[float] = Field(None, gt=0, le=500)
    waist: Optional[float] = Field(None, gt=0, le=500)
    hips: Optional[float] = Field(None, gt=0, le=500)
    thigh: Optional[float] = Field(None, gt=0, le=500)
    arm: Optional[float] = Field(None, gt=0, le=500)
    notes: Optional[str] = None

    @field_validator("date", "chest", "waist", "hips", "thigh", "arm", "notes", mode="before")
    @classmethod
    def _blank_is_missing(cls, value):
        return _empty_to_none(value)


class MeasurementEntry(BaseModel):
    """Schema for measurement response."""
    id: int
    date: dt.date
    chest: Optional[float] = None
    waist: Optional[float] = None
    hips: Optional[float] = None
    thigh: Optional[float] = None
    arm: Optional[float] = None
    notes: Optional[str] = None
    created_at: Optional[dt.datetime] = None

    model_config = ConfigDict(from_attributes=True)


class MeasurementList(BaseModel):
    measurements: List[MeasurementEntry]


# ============ Goal Schemas ============

class GoalUpdate(BaseModel):
    """
    Goal weight update. The key is required; null clears the goal.
    Only JSON numbers are accepted, positivity is checked by the goal service.
    """
    goal_weight: Optional[Union[StrictInt, StrictFloat]] = Field(alias="goalWeight")

    model_config = ConfigDict(populate_by_name=True)


class GoalResponse(BaseModel):
    goal_weight: Optional[float] = Field(None, serialization_alias="goalWeight")


class GoalUpdateResponse(GoalResponse):
    success: bool = True


# ============ Analytics Schemas ============

class WeightSummary(BaseModel):
    """Derived statistics over a user's weight history."""
    period: str
    total_entries: int
    period_entries: int
    current_weight: Optional[float] = None
    previous_weight: Optional[float] = None
    change: Optional[float] = None
    trend: Optional[str] = None  # "gain", "loss" or "stable"
    min_weight: Optional[float] = None
    max_weight: Optional[float] = None
    average_weight: Optional[float] = None
    goal_weight: Optional[float] = None
    weight_to_goal: Optional[float] = None
    goal_progress: Optional[int] = None
    goal_progress_display: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)
