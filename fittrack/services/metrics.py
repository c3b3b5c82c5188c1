"""
Metrics engine.

Summary and per-category breakdown statistics for one user over a trailing
window of days. Records are fetched once and reduced in a single pass:
sums, averages (0 when nothing matched, never NaN) and groups ranked by
count with a stable sort so equal counts keep first-seen order.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Iterable, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

from fittrack.config import get_settings
from fittrack.core.clock import Clock, system_clock
from fittrack.core.enums import MealType, WorkoutType
from fittrack.core.logging import get_logger
from fittrack.models import NutritionEntry, WaterIntake, Workout
from fittrack.services.store import RecordStore

logger = get_logger(__name__)
settings = get_settings()


class StatsModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Workouts

class WorkoutSummary(StatsModel):
    total_workouts: int = 0
    total_duration: int = 0
    total_calories: float = 0
    avg_duration: float = 0
    avg_calories: float = 0


class WorkoutTypeBreakdown(StatsModel):
    type: WorkoutType
    count: int
    total_calories: float


class WorkoutStats(StatsModel):
    summary: WorkoutSummary = Field(default_factory=WorkoutSummary)
    by_type: list[WorkoutTypeBreakdown] = Field(default_factory=list)


# Nutrition

class NutritionSummary(StatsModel):
    total_calories: float = 0
    total_protein: float = 0
    total_carbs: float = 0
    total_fats: float = 0
    avg_calories: float = 0
    avg_protein: float = 0
    avg_carbs: float = 0
    avg_fats: float = 0


class MealBreakdown(StatsModel):
    meal_type: MealType
    count: int
    total_calories: float
    total_protein: float
    total_carbs: float
    total_fats: float


class NutritionStats(StatsModel):
    summary: NutritionSummary = Field(default_factory=NutritionSummary)
    by_meal: list[MealBreakdown] = Field(default_factory=list)


# Water

class WaterSummary(StatsModel):
    total_glasses: int = 0
    total_amount: float = 0
    avg_glasses: float = 0
    avg_amount: float = 0
    days_tracked: int = 0


class DailyWater(StatsModel):
    date: datetime
    glasses: int
    amount: float


class WaterStats(StatsModel):
    summary: WaterSummary = Field(default_factory=WaterSummary)
    daily_intake: list[DailyWater] = Field(default_factory=list)


@dataclass
class Group:
    """Running count and per-field sums for one category."""
    count: int = 0
    totals: dict[str, float] = field(default_factory=dict)


@dataclass
class Reduction:
    count: int
    totals: dict[str, float]
    averages: dict[str, float]
    groups: list[tuple[Any, Group]]


def reduce_records(
    records: Iterable[Any],
    fields: Sequence[str],
    group_by: Optional[str] = None,
) -> Reduction:
    """Fold ``records`` into totals, averages and ranked groups.

    Args:
        records: Objects exposing each name in ``fields`` as an attribute.
        fields: Numeric attributes to sum.
        group_by: Attribute whose value keys the breakdown groups.

    Returns:
        Reduction whose groups are sorted by count descending; ties keep
        the order in which the category was first seen.
    """
    count = 0
    totals = dict.fromkeys(fields, 0)
    groups: dict[Any, Group] = {}

    for record in records:
        count += 1
        values = {name: getattr(record, name) or 0 for name in fields}
        for name, value in values.items():
            totals[name] += value

        if group_by is not None:
            key = getattr(record, group_by)
            group = groups.get(key)
            if group is None:
                group = groups[key] = Group(totals=dict.fromkeys(fields, 0))
            group.count += 1
            for name, value in values.items():
                group.totals[name] += value

    averages = {name: (totals[name] / count if count else 0) for name in fields}
    ranked = sorted(groups.items(), key=lambda item: -item[1].count)
    return Reduction(count=count, totals=totals, averages=averages, groups=ranked)


class MetricsEngine:
    """Read-only statistics for a single owner's records."""

    def __init__(self, db: Session, clock: Optional[Clock] = None):
        self.db = db
        self.clock = clock or system_clock

    def window_start(self, period: int) -> Optional[datetime]:
        """Inclusive lower bound of the window, or None for an empty window.

        Windows reaching past the earliest representable date cover the
        whole history.
        """
        if period <= 0:
            return None
        try:
            return self.clock.now() - timedelta(days=period)
        except OverflowError:
            return datetime.min

    def _records(self, model, owner_id: int, period: int) -> list:
        since = self.window_start(period)
        if since is None:
            return []
        return RecordStore(self.db, model).find_since(owner_id, since)

    def workout_stats(self, owner_id: int, period: Optional[int] = None) -> WorkoutStats:
        period = settings.default_stats_period if period is None else period
        records = self._records(Workout, owner_id, period)
        reduction = reduce_records(records, ("duration", "calories_burned"), group_by="type")

        stats = WorkoutStats(
            summary=WorkoutSummary(
                total_workouts=reduction.count,
                total_duration=reduction.totals["duration"],
                total_calories=reduction.totals["calories_burned"],
                avg_duration=reduction.averages["duration"],
                avg_calories=reduction.averages["calories_burned"],
            ),
            by_type=[
                WorkoutTypeBreakdown(
                    type=key,
                    count=group.count,
                    total_calories=group.totals["calories_burned"],
                )
                for key, group in reduction.groups
            ],
        )
        logger.debug("workout_stats_computed", owner_id=owner_id, period=period, count=reduction.count)
        return stats

    def nutrition_stats(self, owner_id: int, period: Optional[int] = None) -> NutritionStats:
        period = settings.default_stats_period if period is None else period
        records = self._records(NutritionEntry, owner_id, period)
        macros = ("calories", "protein", "carbs", "fats")
        reduction = reduce_records(records, macros, group_by="meal_type")

        stats = NutritionStats(
            summary=NutritionSummary(
                **{f"total_{name}": reduction.totals[name] for name in macros},
                **{f"avg_{name}": reduction.averages[name] for name in macros},
            ),
            by_meal=[
                MealBreakdown(
                    meal_type=key,
                    count=group.count,
                    **{f"total_{name}": group.totals[name] for name in macros},
                )
                for key, group in reduction.groups
            ],
        )
        logger.debug("nutrition_stats_computed", owner_id=owner_id, period=period, count=reduction.count)
        return stats

    def water_stats(self, owner_id: int, period: Optional[int] = None) -> WaterStats:
        period = settings.default_stats_period if period is None else period
        # One record per day, so the chronological record list is the daily series
        records = self._records(WaterIntake, owner_id, period)
        reduction = reduce_records(records, ("glasses", "amount"))

        stats = WaterStats(
            summary=WaterSummary(
                total_glasses=reduction.totals["glasses"],
                total_amount=reduction.totals["amount"],
                avg_glasses=reduction.averages["glasses"],
                avg_amount=reduction.averages["amount"],
                days_tracked=reduction.count,
            ),
            daily_intake=[
                DailyWater(date=record.date, glasses=record.glasses, amount=record.amount)
                for record in records
            ],
        )
        logger.debug("water_stats_computed", owner_id=owner_id, period=period, count=reduction.count)
        return stats
