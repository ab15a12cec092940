"""
Anki-style spaced repetition scheduling.

Prompts move through a fixed-step learning phase and then a review phase
where intervals grow geometrically on success and reset on failure.

    params = SchedulingParameters(learning_intervals=(60, 600))
    meta = PromptSchedulingMetadata()
    meta = update(meta, params, RecallEase.GOOD)
    enumerate_outcomes(meta, params)  # preview every valid rating

Everything here is pure: no I/O, no clock, no shared state.
"""

from .enums import RecallEase, RECALL_EASE_LABELS, parse_recall_ease
from .errors import SchedulingError, InvalidRating
from .logic import (
    PromptSchedulingMetadata,
    UpdateResult,
    evaluate,
    update,
    enumerate_outcomes,
)
from .parameters import SchedulingParameters
from .state import Learning, Review, PromptState, is_learning, phase_of

__all__ = [
    "RecallEase",
    "RECALL_EASE_LABELS",
    "parse_recall_ease",
    "SchedulingError",
    "InvalidRating",
    "PromptSchedulingMetadata",
    "UpdateResult",
    "evaluate",
    "update",
    "enumerate_outcomes",
    "SchedulingParameters",
    "Learning",
    "Review",
    "PromptState",
    "is_learning",
    "phase_of",
]
