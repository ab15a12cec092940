from django.conf import settings

from .domain.constants import (
    MINUTE,
    EASY_GRADUATING_INTERVAL,
    GOOD_GRADUATING_INTERVAL,
    EASY_BOOST,
)
from .domain.parameters import SchedulingParameters

# Standard study session: 1 minute, then 10 minutes
LEARNING_INTERVALS = (1 * MINUTE, 10 * MINUTE)


def get_scheduling_parameters():
    """
    Build SchedulingParameters from settings.SPACED_REPETITION, falling back
    to the defaults above for any missing key.
    """
    conf = getattr(settings, "SPACED_REPETITION", {})
    return SchedulingParameters(
        learning_intervals=tuple(
            float(s) for s in conf.get("LEARNING_INTERVALS", LEARNING_INTERVALS)
        ),
        easy_graduating_interval=float(
            conf.get("EASY_GRADUATING_INTERVAL", EASY_GRADUATING_INTERVAL)
        ),
        good_graduating_interval=float(
            conf.get("GOOD_GRADUATING_INTERVAL", GOOD_GRADUATING_INTERVAL)
        ),
        easy_boost=float(conf.get("EASY_BOOST", EASY_BOOST)),
    )
