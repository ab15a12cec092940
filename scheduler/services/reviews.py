from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from django.db import transaction, IntegrityError
from django.utils import timezone
import structlog
from ..config import get_scheduling_parameters
from ..data.repos import (
    find_schedule,
    get_existing_idempotent,
    get_or_create_schedule_for_update,
    persist_review,
)
from ..domain import (
    InvalidRating,
    PromptSchedulingMetadata,
    RecallEase,
    phase_of,
    update,
)
from ..utils.time import after_seconds, elapsed_seconds, to_utc_iso

logger = structlog.get_logger()


@dataclass(frozen=True)
class ReviewOutcome:
    next_review_at: datetime
    interval_seconds: float
    requested_rating: RecallEase
    applied_rating: RecallEase
    metadata: Optional[PromptSchedulingMetadata]
    idempotent: bool


def apply_rating(metadata, parameters, rating, elapsed):
    """
    Update metadata, retrying a learning-phase HARD as AGAIN.

    Returns (new_metadata, applied_rating).
    """
    try:
        return update(metadata, parameters, rating, elapsed), rating
    except InvalidRating as e:
        logger.warning("invalid_rating_retried",
            rating=e.rating.name,
            state=repr(e.state),
            retry_with=RecallEase.AGAIN.name,
        )
        return update(metadata, parameters, RecallEase.AGAIN, elapsed), RecallEase.AGAIN


def record_review(user_id, prompt_id, rating, idempotency_key: str, now=None):
    rating = RecallEase(rating)
    logger.info("review_received",
        user_id=str(user_id),
        prompt_id=str(prompt_id),
        rating=rating.name,
        idempotency_key=idempotency_key,
    )

    # Fast path: return previous result if same idempotency_key
    existing = get_existing_idempotent(user_id, prompt_id, idempotency_key)
    if existing:
        return _replayed(existing, user_id, prompt_id)

    now = now or timezone.now()
    parameters = get_scheduling_parameters()

    try:
        with transaction.atomic():
            # Serialize schedule update per (user, prompt)
            sched = get_or_create_schedule_for_update(user_id, prompt_id)

            # A duplicate may have committed while we waited for the lock
            existing = get_existing_idempotent(user_id, prompt_id, idempotency_key)
            if existing:
                return _replayed(existing, user_id, prompt_id)

            elapsed = elapsed_seconds(sched.last_reviewed_at, now)
            metadata, applied = apply_rating(
                sched.to_metadata(), parameters, rating, elapsed
            )
            next_dt = after_seconds(now, metadata.interval)

            sched.apply_metadata(metadata)
            sched.last_reviewed_at = now
            sched.next_review_at = next_dt
            sched.save()

            persist_review(
                user_id, prompt_id, rating, applied, idempotency_key,
                phase_of(metadata.state), next_dt, metadata.interval,
            )
    except IntegrityError:
        # Duplicate idempotency key: schedule update was rolled back
        existing = get_existing_idempotent(user_id, prompt_id, idempotency_key)
        if existing is None:
            raise
        return _replayed(existing, user_id, prompt_id)

    logger.info("review_scheduled",
        user_id=str(user_id),
        prompt_id=str(prompt_id),
        applied_rating=applied.name,
        phase=phase_of(metadata.state),
        elapsed_seconds=elapsed,
        interval_seconds=metadata.interval,
        spacing_factor=metadata.spacing_factor,
        next_review_utc=to_utc_iso(next_dt),
    )

    return ReviewOutcome(
        next_review_at=next_dt,
        interval_seconds=metadata.interval,
        requested_rating=rating,
        applied_rating=applied,
        metadata=metadata,
        idempotent=False,
    )


def _replayed(log, user_id, prompt_id):
    logger.info("idempotent_reuse",
        user_id=str(user_id),
        prompt_id=str(prompt_id),
        next_review_utc=to_utc_iso(log.next_review_at),
    )
    sched = find_schedule(user_id, prompt_id)
    return ReviewOutcome(
        next_review_at=log.next_review_at,
        interval_seconds=log.interval_seconds,
        requested_rating=RecallEase(log.requested_rating),
        applied_rating=RecallEase(log.applied_rating),
        metadata=sched.to_metadata() if sched else None,
        idempotent=True,
    )
