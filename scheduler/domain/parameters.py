from dataclasses import dataclass
from typing import Tuple

from .constants import (
    EASY_BOOST,
    EASY_GRADUATING_INTERVAL,
    FALLBACK_LEARNING_INTERVAL,
    GOOD_GRADUATING_INTERVAL,
)


@dataclass(frozen=True)
class SchedulingParameters:
    """
    Tunables for computing the next review interval of a prompt.

    learning_intervals:       wait (seconds) for each learning step; its length
                              is the number of GOOD answers needed to graduate
    easy_graduating_interval: interval after graduating from learning with EASY
    good_graduating_interval: interval after the last learning step with GOOD
    easy_boost:               extra multiplier for EASY answers in review
    """
    learning_intervals: Tuple[float, ...]
    easy_graduating_interval: float = EASY_GRADUATING_INTERVAL
    good_graduating_interval: float = GOOD_GRADUATING_INTERVAL
    easy_boost: float = EASY_BOOST

    def __post_init__(self):
        # Accept any sequence, store an immutable one
        object.__setattr__(self, "learning_intervals", tuple(self.learning_intervals))

    @property
    def first_learning_interval(self) -> float:
        if self.learning_intervals:
            return self.learning_intervals[0]
        return FALLBACK_LEARNING_INTERVAL

    @property
    def last_learning_step(self) -> int:
        return len(self.learning_intervals) - 1
