import pytest
import logging

from scheduler.domain import (
    InvalidRating,
    Learning,
    PromptSchedulingMetadata,
    RecallEase,
    Review,
    SchedulingParameters,
    SchedulingError,
    enumerate_outcomes,
    evaluate,
    parse_recall_ease,
    update,
)
from scheduler.domain.constants import DAY, MINUTE

logger = logging.getLogger(__name__)

PARAMS = SchedulingParameters(learning_intervals=(1 * MINUTE, 10 * MINUTE))
LONG_PARAMS = SchedulingParameters(
    learning_intervals=(1 * MINUTE, 10 * MINUTE, 1 * 3600, 6 * 3600)
)


def review_item(interval=4 * DAY, factor=2.5, reviews=5):
    return PromptSchedulingMetadata(
        state=Review(), review_count=reviews, interval=interval, spacing_factor=factor
    )


# Learning phase

def test_new_prompt_defaults():
    item = PromptSchedulingMetadata()
    assert item.state == Learning(0)
    assert item.review_count == 0
    assert item.lapse_count == 0
    assert item.interval == 0
    assert item.spacing_factor == 2.5


def test_parameter_defaults():
    assert PARAMS.easy_graduating_interval == 345600
    assert PARAMS.good_graduating_interval == 86400
    assert PARAMS.easy_boost == 1.3


@pytest.mark.parametrize("params,step", [
    (params, step)
    for params in (PARAMS, LONG_PARAMS)
    for step in range(len(params.learning_intervals) - 1)
])
def test_good_advances_learning_step(params, step):
    result = update(PromptSchedulingMetadata(state=Learning(step)), params, RecallEase.GOOD)
    assert result.state == Learning(step + 1)
    assert result.interval == params.learning_intervals[step + 1]


def test_good_walks_every_learning_step():
    item = PromptSchedulingMetadata()
    for step, interval in enumerate(LONG_PARAMS.learning_intervals[1:], start=1):
        item = update(item, LONG_PARAMS, RecallEase.GOOD)
        assert item.state == Learning(step)
        assert item.interval == interval

    item = update(item, LONG_PARAMS, RecallEase.GOOD)
    assert item.state == Review()
    assert item.interval == LONG_PARAMS.good_graduating_interval


def test_good_on_last_step_graduates():
    last = Learning(len(PARAMS.learning_intervals) - 1)
    result = update(PromptSchedulingMetadata(state=last), PARAMS, RecallEase.GOOD)
    assert result.state == Review()
    assert result.interval == PARAMS.good_graduating_interval


@pytest.mark.parametrize("step", [0, 1, 5])
def test_easy_graduates_immediately(step):
    result = update(PromptSchedulingMetadata(state=Learning(step)), PARAMS, RecallEase.EASY)
    assert result.state == Review()
    assert result.interval == PARAMS.easy_graduating_interval


@pytest.mark.parametrize("step", [0, 1])
def test_again_in_learning_restarts(step):
    item = PromptSchedulingMetadata(state=Learning(step), interval=600)
    result = update(item, PARAMS, RecallEase.AGAIN)
    assert result.state == Learning(0)
    assert result.interval == 60
    assert result.lapse_count == 0
    assert result.spacing_factor == 2.5


@pytest.mark.parametrize("step", [0, 1, 3])
def test_hard_rejected_while_learning(step):
    item = PromptSchedulingMetadata(state=Learning(step), review_count=2)
    with pytest.raises(InvalidRating) as exc:
        update(item, PARAMS, RecallEase.HARD)
    assert isinstance(exc.value, SchedulingError)
    assert exc.value.rating == RecallEase.HARD
    assert exc.value.state == Learning(step)
    # No mutation on failure
    assert item.state == Learning(step)
    assert item.review_count == 2


def test_evaluate_reports_invalid_rating_without_raising():
    result = evaluate(PromptSchedulingMetadata(), PARAMS, RecallEase.HARD)
    assert not result.ok
    assert result.metadata is None
    assert isinstance(result.error, InvalidRating)


def test_empty_learning_intervals_fall_back_to_one_minute():
    params = SchedulingParameters(learning_intervals=())
    result = update(review_item(), params, RecallEase.AGAIN)
    assert result.state == Learning(0)
    assert result.interval == 60

    graduated = update(PromptSchedulingMetadata(), params, RecallEase.GOOD)
    assert graduated.state == Review()


def test_learning_progression_scenario():
    """60s/600s steps: new -> good -> good ends in review after 1 day."""
    item = PromptSchedulingMetadata()

    item = update(item, PARAMS, RecallEase.GOOD)
    assert item.state == Learning(1)
    assert item.interval == 600

    item = update(item, PARAMS, RecallEase.GOOD)
    assert item.state == Review()
    assert item.interval == 86400
    assert item.review_count == 2
    logger.info("✓ Passed: learning -> review in %s steps", item.review_count)


# Review phase

def test_review_good_blends_elapsed_time():
    item = review_item()
    result = update(item, PARAMS, RecallEase.GOOD, elapsed=1 * DAY)
    assert result.interval == pytest.approx((345600 + 43200) * 2.5)
    assert result.spacing_factor == 2.5
    assert result.state == Review()


def test_review_easy_applies_boost():
    result = update(review_item(), PARAMS, RecallEase.EASY, elapsed=1 * DAY)
    assert result.interval == pytest.approx((4 * DAY + DAY) * 2.5 * 1.3)
    assert result.spacing_factor == pytest.approx(2.65)
    assert result.state == Review()


def test_review_hard_shrinks_factor():
    result = update(review_item(), PARAMS, RecallEase.HARD, elapsed=1 * DAY)
    assert result.interval == pytest.approx(4 * DAY * 1.2)
    assert result.spacing_factor == pytest.approx(2.35)
    assert result.state == Review()
    assert result.lapse_count == 0


def test_review_again_is_a_lapse():
    result = update(review_item(), PARAMS, RecallEase.AGAIN, elapsed=1 * DAY)
    assert result.lapse_count == 1
    assert result.spacing_factor == pytest.approx(2.3)
    assert result.state == Learning(0)
    assert result.interval == PARAMS.learning_intervals[0]


def test_spacing_factor_floor():
    item = review_item(factor=1.4)
    for _ in range(6):
        item = update(item, PARAMS, RecallEase.AGAIN)
        assert item.spacing_factor >= 1.3
        item = update(item, PARAMS, RecallEase.EASY)
        item = update(item, PARAMS, RecallEase.HARD)
        assert item.spacing_factor >= 1.3
    assert item.lapse_count == 6


def test_hard_floor_in_review():
    result = update(review_item(factor=1.35), PARAMS, RecallEase.HARD)
    assert result.spacing_factor == 1.3


@pytest.mark.parametrize("state", [Learning(0), Learning(1), Review()])
@pytest.mark.parametrize("rating", [RecallEase.AGAIN, RecallEase.GOOD, RecallEase.EASY])
def test_review_count_increments_once(state, rating):
    item = PromptSchedulingMetadata(state=state, review_count=7, interval=DAY)
    assert update(item, PARAMS, rating).review_count == 8


def test_update_does_not_mutate_input():
    item = review_item()
    item.updating(PARAMS, RecallEase.EASY, 1 * DAY)
    assert item == review_item()


# Outcome enumeration

def test_enumerate_new_prompt():
    results = enumerate_outcomes(PromptSchedulingMetadata(), PARAMS)

    # No "hard" answer while learning
    assert set(results) == {RecallEase.AGAIN, RecallEase.GOOD, RecallEase.EASY}
    for result in results.values():
        assert result.review_count == 1

    assert results[RecallEase.AGAIN].state == Learning(0)
    assert results[RecallEase.AGAIN].interval == PARAMS.learning_intervals[0]
    assert results[RecallEase.EASY].state == Review()
    assert results[RecallEase.EASY].interval == PARAMS.easy_graduating_interval
    assert results[RecallEase.GOOD].state == Learning(1)
    assert results[RecallEase.GOOD].interval == PARAMS.learning_intervals[1]


def test_enumerate_ready_to_graduate():
    item = PromptSchedulingMetadata(state=Learning(len(PARAMS.learning_intervals) - 1))
    results = enumerate_outcomes(item, PARAMS)
    assert len(results) == 3
    assert results[RecallEase.GOOD].state == Review()
    assert results[RecallEase.GOOD].interval == PARAMS.good_graduating_interval


def test_enumerate_review_prompt_has_all_ratings():
    item = review_item()
    results = enumerate_outcomes(item, PARAMS, elapsed=DAY)
    assert len(results) == 4
    assert results[RecallEase.HARD].interval == pytest.approx(item.interval * 1.2)
    assert results[RecallEase.GOOD].interval == pytest.approx(
        (item.interval + DAY / 2) * item.spacing_factor
    )


def test_enumerate_is_idempotent():
    item = review_item()
    first = enumerate_outcomes(item, PARAMS, elapsed=DAY)
    second = enumerate_outcomes(item, PARAMS, elapsed=DAY)
    assert first == second
    assert item == review_item()


def test_repeated_good_reaches_review():
    item = PromptSchedulingMetadata()
    for _ in PARAMS.learning_intervals:
        item = enumerate_outcomes(item, PARAMS)[RecallEase.GOOD]
    assert item.state == Review()
    assert item.interval == PARAMS.good_graduating_interval


# Rating parsing

@pytest.mark.parametrize("raw,expected", [
    ("again", RecallEase.AGAIN),
    ("Hard", RecallEase.HARD),
    (2, RecallEase.GOOD),
    ("3", RecallEase.EASY),
])
def test_parse_recall_ease(raw, expected):
    assert parse_recall_ease(raw) == expected


@pytest.mark.parametrize("raw", ["meh", "", 4, -1, True, False, 2.7, 2.0, "2.7", None, [2]])
def test_parse_recall_ease_rejects_unknown(raw):
    with pytest.raises(ValueError):
        parse_recall_ease(raw)


def test_ratings_are_ordered():
    assert RecallEase.AGAIN < RecallEase.HARD < RecallEase.GOOD < RecallEase.EASY
