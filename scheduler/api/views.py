from rest_framework import views, status
from rest_framework.response import Response
import structlog
import uuid
from ..domain import RECALL_EASE_LABELS, is_learning, phase_of
from ..services.due import due_prompt_ids
from ..services.preview import preview_outcomes
from ..services.reviews import record_review
from ..utils.time import to_utc_iso
from .serializers import ReviewInSerializer, DueQuerySerializer

base_logger = structlog.get_logger()


def metadata_payload(metadata):
    return {
        "phase": phase_of(metadata.state),
        "learning_step": metadata.state.step if is_learning(metadata.state) else None,
        "review_count": metadata.review_count,
        "lapse_count": metadata.lapse_count,
        "interval_seconds": metadata.interval,
        "spacing_factor": metadata.spacing_factor,
    }


class ReviewView(views.APIView):
    def post(self, request):
        # Create a unique request_id
        request_id = str(uuid.uuid4())
        logger = base_logger.bind(request_id=request_id)

        s = ReviewInSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        user_id = s.validated_data["user_id"]
        prompt_id = s.validated_data["prompt_id"]
        rating = s.validated_data["rating"]
        idem = s.validated_data["idempotency_key"]

        outcome = record_review(user_id, prompt_id, rating, idem)
        status_code = status.HTTP_200_OK if outcome.idempotent else status.HTTP_201_CREATED

        # Log with request_id & relevant context
        logger.info(
            "review_api_response",
            user_id=str(user_id),
            prompt_id=str(prompt_id),
            rating=rating.name,
            applied_rating=outcome.applied_rating.name,
            idempotent=outcome.idempotent,
            interval_seconds=outcome.interval_seconds,
            next_review_utc=to_utc_iso(outcome.next_review_at),
            status=status_code,
        )

        body = {}
        if outcome.metadata is not None:
            body.update(metadata_payload(outcome.metadata))
        body.update({
            "next_review_utc": to_utc_iso(outcome.next_review_at),
            "interval_seconds": outcome.interval_seconds,
            "requested_rating": RECALL_EASE_LABELS[outcome.requested_rating],
            "applied_rating": RECALL_EASE_LABELS[outcome.applied_rating],
            "idempotent": outcome.idempotent,
        })
        return Response(body, status=status_code)


class OutcomesView(views.APIView):
    def get(self, request, user_id, prompt_id):
        request_id = str(uuid.uuid4())
        logger = base_logger.bind(request_id=request_id)

        metadata, outcomes = preview_outcomes(user_id, prompt_id)

        logger.info(
            "outcomes_api_response",
            user_id=str(user_id),
            prompt_id=str(prompt_id),
            option_count=len(outcomes),
        )

        return Response(
            {
                "user_id": str(user_id),
                "prompt_id": str(prompt_id),
                "current": metadata_payload(metadata),
                "outcomes": {
                    RECALL_EASE_LABELS[rating]: dict(
                        metadata_payload(outcome),
                        next_review_utc=to_utc_iso(next_dt),
                    )
                    for rating, (outcome, next_dt) in outcomes.items()
                },
            }
        )


class DuePromptsView(views.APIView):
    def get(self, request, user_id):
        # Create a unique request_id
        request_id = str(uuid.uuid4())
        logger = base_logger.bind(request_id=request_id)

        qs = DueQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)
        until = qs.validated_data["until"]
        mode = qs.validated_data["mode"]

        results = [str(pid) for pid in due_prompt_ids(user_id, until, mode)]

        logger.info(
            "due_prompts_api_response",
            user_id=str(user_id),
            until_utc=to_utc_iso(until),
            mode=mode,
            prompt_count=len(results),
        )

        return Response(
            {
                "user_id": str(user_id),
                "until_utc": to_utc_iso(until),
                "mode": mode,
                "prompt_ids": results,
            }
        )
