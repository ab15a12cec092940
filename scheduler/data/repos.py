from django.db import transaction, IntegrityError
from django.db.models import Case, F, IntegerField, Value, When
from django.utils import timezone
from .models import PromptSchedule, ReviewLog
from ..domain.state import REVIEW


def get_or_create_schedule_for_update(user_id, prompt_id):
    """
    Fetch schedule row and lock it for update to avoid races.
    Create if missing. Must be called inside transaction.atomic().
    """
    locked = PromptSchedule.objects.select_for_update()
    try:
        return locked.get(user_id=user_id, prompt_id=prompt_id)
    except PromptSchedule.DoesNotExist:
        pass

    try:
        with transaction.atomic():
            sched = PromptSchedule.objects.create(
                user_id=user_id, prompt_id=prompt_id, next_review_at=timezone.now()
            )
    except IntegrityError:
        # A concurrent first review created the row
        return locked.get(user_id=user_id, prompt_id=prompt_id)
    # Lock the just-created row
    return locked.get(pk=sched.pk)


def find_schedule(user_id, prompt_id):
    return PromptSchedule.objects.filter(user_id=user_id, prompt_id=prompt_id).first()


def due_schedules(user_id, until, phase=None):
    """
    Schedules due by `until`: review prompts before learning prompts,
    each group most recently reviewed first.
    """
    qs = PromptSchedule.objects.filter(user_id=user_id, next_review_at__lte=until)
    if phase is not None:
        qs = qs.filter(phase=phase)
    review_first = Case(
        When(phase=REVIEW, then=Value(0)),
        default=Value(1),
        output_field=IntegerField(),
    )
    return list(qs.order_by(
        review_first,
        F("last_reviewed_at").desc(nulls_last=True),
        "prompt_id",
    ))


def get_existing_idempotent(user_id, prompt_id, idem_key):
    return ReviewLog.objects.filter(
        user_id=user_id, prompt_id=prompt_id, idempotency_key=idem_key
    ).first()


def persist_review(user_id, prompt_id, requested_rating, applied_rating, idem_key,
                   phase, next_review_at, interval_seconds):
    """
    Insert ReviewLog. A duplicate idempotency key raises IntegrityError so the
    caller's transaction, schedule update included, rolls back.
    """
    return ReviewLog.objects.create(
        user_id=user_id, prompt_id=prompt_id,
        requested_rating=int(requested_rating),
        applied_rating=int(applied_rating),
        idempotency_key=idem_key, phase=phase,
        next_review_at=next_review_at,
        interval_seconds=interval_seconds,
    )
