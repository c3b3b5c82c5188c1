"""Nutrition log endpoints."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from fittrack.api.deps import get_current_user, get_metrics_engine
from fittrack.api.schemas import (
    NutritionCreate,
    NutritionOut,
    NutritionUpdate,
    envelope,
    serialize,
)
from fittrack.core.clock import Clock, get_clock
from fittrack.core.enums import MealType
from fittrack.core.logging import get_logger
from fittrack.database import get_db
from fittrack.models import NutritionEntry, User
from fittrack.services.metrics import MetricsEngine
from fittrack.services.store import RecordStore

logger = get_logger(__name__)

router = APIRouter()


def _store(db: Session) -> RecordStore:
    return RecordStore(db, NutritionEntry, "Nutrition log")


@router.get("")
async def list_nutrition(
    start_date: Optional[datetime] = Query(default=None, alias="startDate"),
    end_date: Optional[datetime] = Query(default=None, alias="endDate"),
    meal_type: Optional[MealType] = Query(default=None, alias="mealType"),
    search: Optional[str] = Query(default=None, max_length=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List nutrition entries, newest first; ``search`` matches food items case-insensitively."""
    entries = _store(db).find(
        current_user.id,
        start=start_date,
        end=end_date,
        filters={"meal_type": meal_type.value} if meal_type else None,
        search=("food_item", search) if search else None,
    )
    return envelope([serialize(NutritionOut, e) for e in entries])


@router.post("", status_code=201)
async def create_nutrition(
    entry: NutritionCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    fields = entry.model_dump()
    fields["date"] = fields["date"] or clock.now()
    record = _store(db).insert(current_user.id, **fields)

    logger.info("nutrition_created", user_id=current_user.id, entry_id=record.id, meal_type=record.meal_type)
    return envelope(serialize(NutritionOut, record), "Nutrition log created successfully")


@router.put("/{entry_id}")
async def update_nutrition(
    entry_id: int,
    entry: NutritionUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    record = _store(db).update_owned(current_user.id, entry_id, entry.changes())
    return envelope(serialize(NutritionOut, record), "Nutrition log updated successfully")


@router.delete("/{entry_id}")
async def delete_nutrition(
    entry_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    _store(db).delete_owned(current_user.id, entry_id)
    logger.info("nutrition_deleted", user_id=current_user.id, entry_id=entry_id)
    return envelope(message="Nutrition log deleted successfully")


@router.get("/stats")
async def nutrition_stats(
    period: Optional[int] = Query(default=None, description="Window length in days"),
    current_user: User = Depends(get_current_user),
    engine: MetricsEngine = Depends(get_metrics_engine),
):
    """Macro totals, averages and per-meal breakdown over the last ``period`` days."""
    stats = engine.nutrition_stats(current_user.id, period)
    return envelope(stats.model_dump(by_alias=True, mode="json"))
