"""Workout log endpoints."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from fittrack.api.deps import get_current_user, get_metrics_engine
from fittrack.api.schemas import WorkoutCreate, WorkoutOut, WorkoutUpdate, envelope, serialize
from fittrack.core.clock import Clock, get_clock
from fittrack.core.enums import WorkoutType
from fittrack.core.logging import get_logger
from fittrack.database import get_db
from fittrack.models import User, Workout
from fittrack.services.metrics import MetricsEngine
from fittrack.services.store import RecordStore

logger = get_logger(__name__)

router = APIRouter()

RESOURCE = "Workout"


def _store(db: Session) -> RecordStore:
    return RecordStore(db, Workout, RESOURCE)


@router.get("")
async def list_workouts(
    start_date: Optional[datetime] = Query(default=None, alias="startDate"),
    end_date: Optional[datetime] = Query(default=None, alias="endDate"),
    type: Optional[WorkoutType] = Query(default=None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List the user's workouts, newest first (at most 100)."""
    filters = {"type": type.value} if type else None
    workouts = _store(db).find(current_user.id, start=start_date, end=end_date, filters=filters)
    return envelope([serialize(WorkoutOut, w) for w in workouts])


@router.post("", status_code=201)
async def create_workout(
    workout: WorkoutCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """Log a workout; ``date`` defaults to now."""
    fields = workout.model_dump()
    fields["date"] = fields["date"] or clock.now()
    record = _store(db).insert(current_user.id, **fields)

    logger.info("workout_created", user_id=current_user.id, workout_id=record.id, type=record.type)
    return envelope(serialize(WorkoutOut, record), "Workout created successfully")


@router.put("/{workout_id}")
async def update_workout(
    workout_id: int,
    workout: WorkoutUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update one of the user's workouts."""
    record = _store(db).update_owned(current_user.id, workout_id, workout.changes())
    return envelope(serialize(WorkoutOut, record), "Workout updated successfully")


@router.delete("/{workout_id}")
async def delete_workout(
    workout_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Delete one of the user's workouts."""
    _store(db).delete_owned(current_user.id, workout_id)
    logger.info("workout_deleted", user_id=current_user.id, workout_id=workout_id)
    return envelope(message="Workout deleted successfully")


@router.get("/stats")
async def workout_stats(
    period: Optional[int] = Query(default=None, description="Window length in days"),
    current_user: User = Depends(get_current_user),
    engine: MetricsEngine = Depends(get_metrics_engine),
):
    """Workout totals, averages and per-type breakdown over the last ``period`` days."""
    stats = engine.workout_stats(current_user.id, period)
    return envelope(stats.model_dump(by_alias=True, mode="json"))
