from rest_framework import serializers

from ..domain import parse_recall_ease
from ..services.due import MODE_AUTO, MODE_PHASES


class RecallEaseField(serializers.Field):
    default_error_messages = {
        "invalid": "Rating must be one of again, hard, good, easy or 0-3.",
    }

    def to_internal_value(self, data):
        try:
            return parse_recall_ease(data)
        except (TypeError, ValueError):
            self.fail("invalid")

    def to_representation(self, value):
        return value.name.lower()


class ReviewInSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    prompt_id = serializers.UUIDField()
    rating = RecallEaseField()
    idempotency_key = serializers.CharField(max_length=64)


class DueQuerySerializer(serializers.Serializer):
    until = serializers.DateTimeField()  # ISO-8601
    mode = serializers.ChoiceField(choices=list(MODE_PHASES), default=MODE_AUTO)
