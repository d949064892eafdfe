"""
Data access for users, weight entries and measurements.
"""
from .records import MeasurementRecords, RecordService, WeightRecords
from .users import get_goal, register_user, set_goal

__all__ = [
    "MeasurementRecords",
    "RecordService",
    "WeightRecords",
    "get_goal",
    "register_user",
    "set_goal",
]
