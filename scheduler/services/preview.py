from django.utils import timezone
import structlog
from ..config import get_scheduling_parameters
from ..data.repos import find_schedule
from ..domain import PromptSchedulingMetadata, enumerate_outcomes
from ..utils.time import after_seconds, elapsed_seconds

logger = structlog.get_logger()


def preview_outcomes(user_id, prompt_id, now=None):
    """
    Show what each valid rating would do to a prompt, without saving anything.

    Returns (metadata, {RecallEase: (outcome_metadata, next_review_at)}).
    Prompts never reviewed are previewed from default metadata.
    """
    now = now or timezone.now()
    sched = find_schedule(user_id, prompt_id)
    if sched is None:
        metadata = PromptSchedulingMetadata()
        elapsed = 0.0
    else:
        metadata = sched.to_metadata()
        elapsed = elapsed_seconds(sched.last_reviewed_at, now)

    outcomes = enumerate_outcomes(metadata, get_scheduling_parameters(), elapsed)

    logger.debug("outcomes_previewed",
        user_id=str(user_id),
        prompt_id=str(prompt_id),
        elapsed_seconds=elapsed,
        ratings=[r.name for r in outcomes],
    )

    return metadata, {
        rating: (outcome, after_seconds(now, outcome.interval))
        for rating, outcome in outcomes.items()
    }
