from django.db import models
from django.utils import timezone

from ..domain import Learning, PromptSchedulingMetadata, Review, phase_of
from ..domain.constants import DEFAULT_SPACING_FACTOR
from ..domain.state import LEARNING, REVIEW


class PromptSchedule(models.Model):
    PHASE_CHOICES = [(LEARNING, "Learning"), (REVIEW, "Review")]

    user_id = models.UUIDField()
    prompt_id = models.UUIDField()
    phase = models.CharField(max_length=16, choices=PHASE_CHOICES, default=LEARNING)
    learning_step = models.PositiveIntegerField(default=0)
    review_count = models.PositiveIntegerField(default=0)
    lapse_count = models.PositiveIntegerField(default=0)
    interval_seconds = models.FloatField(default=0.0)
    spacing_factor = models.FloatField(default=DEFAULT_SPACING_FACTOR)
    last_reviewed_at = models.DateTimeField(null=True, blank=True)  # UTC
    next_review_at = models.DateTimeField(default=timezone.now)  # UTC

    class Meta:
        unique_together = (("user_id", "prompt_id"),)
        indexes = [
            models.Index(fields=["user_id", "next_review_at"], name="scheduler_p_user_id_3b1f0c_idx"),
        ]

    def to_metadata(self):
        if self.phase == REVIEW:
            state = Review()
        else:
            state = Learning(self.learning_step)
        return PromptSchedulingMetadata(
            state=state,
            review_count=self.review_count,
            lapse_count=self.lapse_count,
            interval=self.interval_seconds,
            spacing_factor=self.spacing_factor,
        )

    def apply_metadata(self, metadata):
        self.phase = phase_of(metadata.state)
        self.learning_step = getattr(metadata.state, "step", 0)
        self.review_count = metadata.review_count
        self.lapse_count = metadata.lapse_count
        self.interval_seconds = metadata.interval
        self.spacing_factor = metadata.spacing_factor


class ReviewLog(models.Model):
    user_id = models.UUIDField()
    prompt_id = models.UUIDField()
    requested_rating = models.SmallIntegerField()
    applied_rating = models.SmallIntegerField()
    idempotency_key = models.CharField(max_length=64)
    created_at = models.DateTimeField(default=timezone.now)
    phase = models.CharField(max_length=16)
    next_review_at = models.DateTimeField()
    interval_seconds = models.FloatField()

    class Meta:
        unique_together = (("user_id", "prompt_id", "idempotency_key"),)
        indexes = [
            models.Index(fields=["user_id", "prompt_id", "created_at"], name="scheduler_r_user_id_8d2e4a_idx"),
        ]
