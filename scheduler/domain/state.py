from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Learning:
    """
    Prompt in the fixed-step learning phase.

    step counts completed learning steps; step == 0 is a new prompt.
    """
    step: int = 0

    def __post_init__(self):
        if self.step < 0:
            raise ValueError(f"Learning step must be >= 0, got {self.step}")


@dataclass(frozen=True)
class Review:
    """Prompt in the open-ended review phase."""


PromptState = Union[Learning, Review]

LEARNING = "learning"
REVIEW = "review"


def is_learning(state: PromptState) -> bool:
    return isinstance(state, Learning)


def phase_of(state: PromptState) -> str:
    return LEARNING if is_learning(state) else REVIEW
