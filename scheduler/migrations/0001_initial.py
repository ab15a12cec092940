import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="PromptSchedule",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("user_id", models.UUIDField()),
                ("prompt_id", models.UUIDField()),
                ("phase", models.CharField(choices=[("learning", "Learning"), ("review", "Review")], default="learning", max_length=16)),
                ("learning_step", models.PositiveIntegerField(default=0)),
                ("review_count", models.PositiveIntegerField(default=0)),
                ("lapse_count", models.PositiveIntegerField(default=0)),
                ("interval_seconds", models.FloatField(default=0.0)),
                ("spacing_factor", models.FloatField(default=2.5)),
                ("last_reviewed_at", models.DateTimeField(blank=True, null=True)),
                ("next_review_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "indexes": [models.Index(fields=["user_id", "next_review_at"], name="scheduler_p_user_id_3b1f0c_idx")],
                "unique_together": {("user_id", "prompt_id")},
            },
        ),
        migrations.CreateModel(
            name="ReviewLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("user_id", models.UUIDField()),
                ("prompt_id", models.UUIDField()),
                ("requested_rating", models.SmallIntegerField()),
                ("applied_rating", models.SmallIntegerField()),
                ("idempotency_key", models.CharField(max_length=64)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("phase", models.CharField(max_length=16)),
                ("next_review_at", models.DateTimeField()),
                ("interval_seconds", models.FloatField()),
            ],
            options={
                "indexes": [models.Index(fields=["user_id", "prompt_id", "created_at"], name="scheduler_r_user_id_8d2e4a_idx")],
                "unique_together": {("user_id", "prompt_id", "idempotency_key")},
            },
        ),
    ]
