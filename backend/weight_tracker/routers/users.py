"""
User routes: goal weight.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from .. import schemas
from ..auth import get_current_user
from ..services import get_goal, set_goal

router = APIRouter(prefix="/api/user", tags=["Users"])


@router.get("/goal", response_model=schemas.GoalResponse)
def read_goal(
    current_user: schemas.SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get the current user's goal weight (null when none is set).
    """
    return {"goal_weight": get_goal(db, current_user.id)}


@router.post("/goal", response_model=schemas.GoalUpdateResponse)
def update_goal(
    payload: schemas.GoalUpdate,
    current_user: schemas.SessionUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Set the goal weight in kg, or clear it by sending null.
    """
    goal_weight = set_goal(db, current_user.id, payload.goal_weight)
    return {"success": True, "goal_weight": goal_weight}
