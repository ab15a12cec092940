from .data.models import PromptSchedule, ReviewLog  # noqa: F401
