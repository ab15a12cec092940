from enum import IntEnum


class RecallEase(IntEnum):
    AGAIN = 0  # could not recall
    HARD = 1   # recalled with difficulty
    GOOD = 2   # recalled with the expected effort
    EASY = 3   # recalled effortlessly


RECALL_EASE_LABELS = {
    RecallEase.AGAIN: "again",
    RecallEase.HARD: "hard",
    RecallEase.GOOD: "good",
    RecallEase.EASY: "easy",
}


def parse_recall_ease(value):
    """Accept a RecallEase, its integer value or its label."""
    # bool is an int subclass; floats are never truncated
    if isinstance(value, bool):
        raise ValueError(f"Unknown recall ease: {value!r}")
    if isinstance(value, int):
        return RecallEase(value)
    if isinstance(value, str):
        value = value.strip()
        if value.isdigit():
            return RecallEase(int(value))
        try:
            return RecallEase[value.upper()]
        except KeyError:
            raise ValueError(f"Unknown recall ease: {value!r}") from None
    raise ValueError(f"Unknown recall ease: {value!r}")
