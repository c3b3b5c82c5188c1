"""Water intake endpoints.

``POST /`` and ``POST /quick-add`` set the intake for a whole day: 201 when
the day's record was created, 200 when an existing one was overwritten.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from fittrack.api.deps import get_current_user, get_metrics_engine, get_water_service
from fittrack.api.schemas import QuickAdd, WaterOut, WaterUpdate, WaterUpsert, envelope, serialize
from fittrack.core.logging import get_logger
from fittrack.database import get_db
from fittrack.models import User, WaterIntake
from fittrack.services.metrics import MetricsEngine
from fittrack.services.store import RecordStore
from fittrack.services.water import WaterService

logger = get_logger(__name__)

router = APIRouter()


def _store(db: Session) -> RecordStore:
    return RecordStore(db, WaterIntake, "Water intake log")


def _upsert_response(response: Response, record: WaterIntake, created: bool) -> dict:
    response.status_code = 201 if created else 200
    message = "Water intake created successfully" if created else "Water intake updated successfully"
    return envelope(serialize(WaterOut, record), message)


@router.get("")
async def list_water(
    start_date: Optional[datetime] = Query(default=None, alias="startDate"),
    end_date: Optional[datetime] = Query(default=None, alias="endDate"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List daily water records, newest first (at most 100)."""
    records = _store(db).find(current_user.id, start=start_date, end=end_date)
    return envelope([serialize(WaterOut, r) for r in records])


@router.post("", status_code=201)
async def upsert_water(
    body: WaterUpsert,
    response: Response,
    current_user: User = Depends(get_current_user),
    service: WaterService = Depends(get_water_service),
):
    """Create or overwrite the water intake for ``date`` (default: today)."""
    record, created = service.upsert_day(current_user.id, body.glasses, body.amount, body.date)
    return _upsert_response(response, record, created)


@router.post("/quick-add", status_code=201)
async def quick_add_water(
    body: QuickAdd,
    response: Response,
    current_user: User = Depends(get_current_user),
    service: WaterService = Depends(get_water_service),
):
    """Set today's intake from a glass count (fixed ml per glass)."""
    record, created = service.quick_add(current_user.id, body.glasses)
    return _upsert_response(response, record, created)


@router.get("/today")
async def today_water(
    current_user: User = Depends(get_current_user),
    service: WaterService = Depends(get_water_service),
):
    """Today's record, or a zero placeholder when nothing was logged."""
    record = service.today(current_user.id)
    if record is None:
        return envelope({"glasses": 0, "amount": 0})
    return envelope(serialize(WaterOut, record))


@router.get("/stats")
async def water_stats(
    period: Optional[int] = Query(default=None, description="Window length in days"),
    current_user: User = Depends(get_current_user),
    engine: MetricsEngine = Depends(get_metrics_engine),
):
    """Water totals, averages, days tracked and the daily series."""
    stats = engine.water_stats(current_user.id, period)
    return envelope(stats.model_dump(by_alias=True, mode="json"))


@router.put("/{record_id}")
async def update_water(
    record_id: int,
    body: WaterUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Change glasses or amount of an existing day record."""
    record = _store(db).update_owned(current_user.id, record_id, body.changes())
    return envelope(serialize(WaterOut, record), "Water intake updated successfully")


@router.delete("/{record_id}")
async def delete_water(
    record_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    _store(db).delete_owned(current_user.id, record_id)
    logger.info("water_intake_deleted", user_id=current_user.id, record_id=record_id)
    return envelope(message="Water intake deleted successfully")
