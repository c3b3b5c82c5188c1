"""
Water intake service.

Water is tracked as a single running total per user per calendar day. The
``(user_id, date)`` unique constraint on ``water_intake`` is the source of
truth; writes insert first and fall back to updating the day's existing
row when the insert collides, so concurrent writers for the same day end
up sharing one row. Conflicts are resolved here and never reach the caller.
"""

from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session
from tenacity import RetryError, retry, retry_if_exception_type, stop_after_attempt, wait_random

from fittrack.config import get_settings
from fittrack.core.clock import Clock, system_clock
from fittrack.core.exceptions import (
    DuplicateKeyError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from fittrack.core.logging import get_logger
from fittrack.models import WaterIntake
from fittrack.services.store import RecordStore

logger = get_logger(__name__)
settings = get_settings()

MAX_AMOUNT_ML = 5000
UPSERT_ATTEMPTS = 3
RESOURCE = "Water intake log"


class WaterService:
    """Per-day water intake upserts and lookups."""

    def __init__(self, db: Session, clock: Optional[Clock] = None):
        self.db = db
        self.clock = clock or system_clock
        self.store = RecordStore(db, WaterIntake, RESOURCE)

    def day_bounds(self, moment: Optional[datetime] = None) -> tuple[datetime, datetime]:
        start = self.clock.start_of_day(moment)
        return start, start + timedelta(days=1)

    def upsert_day(
        self,
        owner_id: int,
        glasses: int,
        amount: float,
        date: Optional[datetime] = None,
    ) -> tuple[WaterIntake, bool]:
        """
        Set the water intake for one day.

        Args:
            owner_id: Owning user
            glasses: Glasses for the day
            amount: Millilitres for the day
            date: Any moment within the target day (default: today)

        Returns:
            (record, created) where created is False when an existing
            record for that day was overwritten

        Raises:
            StoreUnavailableError: If the day's row kept changing under
                every attempt, including the final reconciliation.
        """
        day_start, day_end = self.day_bounds(date)
        try:
            return self._insert_or_overwrite(owner_id, glasses, amount, day_start, day_end)
        except RetryError:
            logger.warning("water_upsert_attempts_exhausted", owner_id=owner_id, day=day_start.date().isoformat())
        return self._reconcile(owner_id, glasses, amount, day_start, day_end)

    @retry(
        stop=stop_after_attempt(UPSERT_ATTEMPTS),
        wait=wait_random(min=0, max=0.05),
        retry=retry_if_exception_type(DuplicateKeyError),
        before_sleep=lambda retry_state: logger.warning(
            "water_upsert_retry",
            attempt=retry_state.attempt_number,
        ),
    )
    def _insert_or_overwrite(
        self,
        owner_id: int,
        glasses: int,
        amount: float,
        day_start: datetime,
        day_end: datetime,
    ) -> tuple[WaterIntake, bool]:
        try:
            record = self.store.insert(owner_id, date=day_start, glasses=glasses, amount=amount)
        except DuplicateKeyError:
            logger.debug("water_intake_day_exists", owner_id=owner_id, day=day_start.date().isoformat())
        else:
            logger.info("water_intake_created", owner_id=owner_id, record_id=record.id, glasses=glasses)
            return record, True

        existing = self.store.find_in_day(owner_id, day_start, day_end)
        if existing is None:
            # Row removed between the conflict and the lookup; start over
            raise DuplicateKeyError(RESOURCE, message="Water intake day changed concurrently")
        return self._overwrite(owner_id, existing.id, glasses, amount)

    def _overwrite(self, owner_id: int, record_id: int, glasses: int, amount: float) -> tuple[WaterIntake, bool]:
        try:
            record = self.store.update_owned(owner_id, record_id, {"glasses": glasses, "amount": amount})
        except NotFoundError as e:
            raise DuplicateKeyError(RESOURCE, message="Water intake day changed concurrently") from e
        logger.info("water_intake_updated", owner_id=owner_id, record_id=record.id, glasses=glasses)
        return record, False

    def _reconcile(
        self,
        owner_id: int,
        glasses: int,
        amount: float,
        day_start: datetime,
        day_end: datetime,
    ) -> tuple[WaterIntake, bool]:
        """Last attempt after retries: look up first, then update or insert."""
        try:
            existing = self.store.find_in_day(owner_id, day_start, day_end)
            if existing is not None:
                return self._overwrite(owner_id, existing.id, glasses, amount)
            record = self.store.insert(owner_id, date=day_start, glasses=glasses, amount=amount)
        except DuplicateKeyError as e:
            logger.error("water_upsert_unresolved", owner_id=owner_id, day=day_start.date().isoformat())
            raise StoreUnavailableError("Water intake is being updated concurrently, try again") from e

        logger.info("water_intake_created", owner_id=owner_id, record_id=record.id, glasses=glasses)
        return record, True

    def quick_add(self, owner_id: int, glasses: int) -> tuple[WaterIntake, bool]:
        """Record today's intake from a glass count at the configured ml per glass."""
        amount = glasses * settings.ml_per_glass
        if amount > MAX_AMOUNT_ML:
            raise ValidationError("glasses", f"{glasses} glasses exceeds {MAX_AMOUNT_ML}ml")
        return self.upsert_day(owner_id, glasses, amount)

    def today(self, owner_id: int) -> Optional[WaterIntake]:
        """Today's record, or None when nothing was logged yet."""
        day_start, day_end = self.day_bounds()
        return self.store.find_in_day(owner_id, day_start, day_end)
