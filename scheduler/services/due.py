from ..data.repos import due_schedules
from ..domain.state import LEARNING, REVIEW

# Study session modes
MODE_LEARNING = "learning"
MODE_REVIEWING = "reviewing"
MODE_AUTO = "auto"

MODE_PHASES = {
    MODE_LEARNING: LEARNING,
    MODE_REVIEWING: REVIEW,
    MODE_AUTO: None,
}


def due_prompt_ids(user_id, until, mode=MODE_AUTO):
    """Prompt ids due by `until`; review prompts before learning prompts."""
    return [s.prompt_id for s in due_schedules(user_id, until, MODE_PHASES[mode])]
