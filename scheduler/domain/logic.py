from dataclasses import dataclass, replace
from typing import Dict, Optional

from .constants import (
    DEFAULT_SPACING_FACTOR,
    EASY_FACTOR_BONUS,
    HARD_FACTOR_PENALTY,
    HARD_INTERVAL_MULTIPLIER,
    LAPSE_FACTOR_PENALTY,
    MIN_SPACING_FACTOR,
)
from .enums import RecallEase
from .errors import InvalidRating
from .parameters import SchedulingParameters
from .state import Learning, PromptState, Review


@dataclass(frozen=True)
class PromptSchedulingMetadata:
    """
    Scheduling state of a single prompt.

    interval is the ideal wait (seconds) until the next review.
    spacing_factor grows review intervals and never drops below 1.3.
    """
    state: PromptState = Learning(0)
    review_count: int = 0
    lapse_count: int = 0
    interval: float = 0.0
    spacing_factor: float = DEFAULT_SPACING_FACTOR

    def updating(self, parameters, rating, elapsed=0.0):
        """Return the metadata after `rating`; raises InvalidRating."""
        return update(self, parameters, rating, elapsed)


@dataclass(frozen=True)
class UpdateResult:
    metadata: Optional[PromptSchedulingMetadata] = None
    error: Optional[InvalidRating] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> PromptSchedulingMetadata:
        if self.error is not None:
            raise self.error
        return self.metadata


def _first_step(metadata, parameters):
    return replace(
        metadata,
        state=Learning(0),
        interval=parameters.first_learning_interval,
    )


def _learning_transition(metadata, parameters, rating, step):
    if rating == RecallEase.AGAIN:
        return _first_step(metadata, parameters)

    if rating == RecallEase.HARD:
        return None

    if rating == RecallEase.GOOD:
        if step < parameters.last_learning_step:
            return replace(
                metadata,
                state=Learning(step + 1),
                interval=parameters.learning_intervals[step + 1],
            )
        # Last step done: graduate
        return replace(
            metadata,
            state=Review(),
            interval=parameters.good_graduating_interval,
        )

    if rating == RecallEase.EASY:
        # Immediate graduation
        return replace(
            metadata,
            state=Review(),
            interval=parameters.easy_graduating_interval,
        )

    raise TypeError(f"Unhandled recall ease: {rating!r}")


def _review_transition(metadata, parameters, rating, elapsed):
    factor = metadata.spacing_factor

    if rating == RecallEase.AGAIN:
        lapsed = replace(
            metadata,
            lapse_count=metadata.lapse_count + 1,
            spacing_factor=max(MIN_SPACING_FACTOR, factor - LAPSE_FACTOR_PENALTY),
        )
        return _first_step(lapsed, parameters)

    if rating == RecallEase.HARD:
        return replace(
            metadata,
            interval=metadata.interval * HARD_INTERVAL_MULTIPLIER,
            spacing_factor=max(MIN_SPACING_FACTOR, factor - HARD_FACTOR_PENALTY),
        )

    if rating == RecallEase.GOOD:
        # Half of the actual gap counts toward the new interval
        return replace(
            metadata,
            interval=(metadata.interval + elapsed / 2) * factor,
        )

    if rating == RecallEase.EASY:
        return replace(
            metadata,
            interval=(metadata.interval + elapsed) * factor * parameters.easy_boost,
            spacing_factor=factor + EASY_FACTOR_BONUS,
        )

    raise TypeError(f"Unhandled recall ease: {rating!r}")


def evaluate(
    metadata: PromptSchedulingMetadata,
    parameters: SchedulingParameters,
    rating: RecallEase,
    elapsed: float = 0.0,
) -> UpdateResult:
    """
    Compute the outcome of rating a prompt, without raising.

    Args:
        metadata:   current scheduling state (left untouched)
        parameters: scheduling tunables
        rating:     learner's recall ease
        elapsed:    seconds since the prior review, 0 if never reviewed

    Returns:
        UpdateResult holding either the new metadata or an InvalidRating.
    """
    rating = RecallEase(rating)
    counted = replace(metadata, review_count=metadata.review_count + 1)
    state = metadata.state

    if isinstance(state, Learning):
        updated = _learning_transition(counted, parameters, rating, state.step)
    elif isinstance(state, Review):
        updated = _review_transition(counted, parameters, rating, elapsed)
    else:
        raise TypeError(f"Unhandled prompt state: {state!r}")

    if updated is None:
        return UpdateResult(error=InvalidRating(rating, state))
    return UpdateResult(metadata=updated)


def update(
    metadata: PromptSchedulingMetadata,
    parameters: SchedulingParameters,
    rating: RecallEase,
    elapsed: float = 0.0,
) -> PromptSchedulingMetadata:
    """
    Return the next scheduling metadata for a prompt recalled with `rating`
    `elapsed` seconds after its prior review.

    Raises InvalidRating for HARD while the prompt is learning.
    """
    return evaluate(metadata, parameters, rating, elapsed).unwrap()


def enumerate_outcomes(
    metadata: PromptSchedulingMetadata,
    parameters: SchedulingParameters,
    elapsed: float = 0.0,
) -> Dict[RecallEase, PromptSchedulingMetadata]:
    """Map every valid rating to the metadata it would produce."""
    outcomes = {}
    for rating in RecallEase:
        result = evaluate(metadata, parameters, rating, elapsed)
        if result.ok:
            outcomes[rating] = result.metadata
    return outcomes
