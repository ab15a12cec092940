class SchedulingError(Exception):
    """Base class for scheduling failures."""


class InvalidRating(SchedulingError):
    """
    A rating that has no meaning for the prompt's current state.

    Raised only for HARD while the prompt is still learning; learning steps
    are fixed, so callers usually retry the update with AGAIN.
    """

    def __init__(self, rating, state):
        self.rating = rating
        self.state = state
        super().__init__(f"{rating.name} is not a valid rating for {state!r}")
