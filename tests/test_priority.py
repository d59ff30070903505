"""Tests for the priority score calculator."""

import itertools

import pytest

from realcoach.engines import priority, seven_day
from realcoach.models.enums import MotivationLevel, PipelineStage, Timeframe


class TestScore:
    def test_stale_high_motivation_lead(self, make_contact):
        contact = make_contact(
            pipeline_stage="Lead",
            motivation_level="High",
            timeframe="1-3 months",
            days_since_contact=10,
        )
        # 25 + 25 * (0.2 + 0.8 * 8/12) + 14 + 12 = 69.3
        assert priority.score(contact) == 69
        assert priority.score(contact, seven_day.check(contact)) == 89

    def test_flagged_hot_contact_is_clamped_to_100(self, make_contact):
        contact = make_contact(
            pipeline_stage="Active Opportunity",
            motivation_level="High",
            timeframe="Immediate",
            days_since_contact=20,
            seven_day_rule_flag=True,
        )
        assert priority.score(contact) == 100

    def test_closed_gets_low_baseline(self, make_contact):
        contact = make_contact(
            pipeline_stage="Closed",
            motivation_level="High",
            timeframe="Immediate",
            days_since_contact=40,
        )
        assert priority.score(contact) == priority.CLOSED_BASELINE_SCORE

    def test_unknown_fields_score_like_low_signals(self, make_contact):
        unknown = make_contact(motivation_level=None, timeframe=None)
        low = make_contact(motivation_level="Low", timeframe=None)
        assert priority.score(unknown) == priority.score(low)

    def test_cached_priority_score_is_ignored(self, make_contact):
        assert priority.score(make_contact(priority_score=0)) == priority.score(
            make_contact(priority_score=99)
        )

    def test_active_outranks_lead(self, make_contact):
        lead = make_contact(pipeline_stage="Lead", motivation_level="Medium")
        active = make_contact(pipeline_stage="Active Opportunity", motivation_level="Medium")
        assert priority.score(active) > priority.score(lead)

    def test_staleness_raises_score(self, make_contact):
        fresh = make_contact(days_since_contact=1)
        stale = make_contact(days_since_contact=14)
        assert priority.score(stale) > priority.score(fresh)

    def test_score_never_decreases_as_days_grow(self, make_contact):
        previous = -1
        for days in range(0, 40):
            contact = make_contact(
                pipeline_stage="New Opportunity", motivation_level="Medium", days_since_contact=days
            )
            current = priority.score(contact, seven_day.check(contact))
            assert current >= previous
            previous = current

    def test_idempotent(self, make_contact):
        contact = make_contact(pipeline_stage="Under Contract", days_since_contact=5)
        assert priority.score(contact) == priority.score(contact)


def test_score_stays_within_bounds(make_contact):
    for stage, motivation, timeframe, days, flag in itertools.product(
        PipelineStage, MotivationLevel, Timeframe, (0, 3, 7, 30), (False, True)
    ):
        contact = make_contact(
            pipeline_stage=stage,
            motivation_level=motivation,
            timeframe=timeframe,
            days_since_contact=days,
            seven_day_rule_flag=flag,
        )
        assert 0 <= priority.score(contact) <= 100


def test_attention_signal_bounds():
    assert priority.attention_signal(0) == pytest.approx(priority.ATTENTION_FLOOR)
    assert priority.attention_signal(2) == pytest.approx(priority.ATTENTION_FLOOR)
    assert priority.attention_signal(14) == pytest.approx(1.0)
    assert priority.attention_signal(100) == pytest.approx(1.0)


@pytest.mark.parametrize(
    "score,level",
    [(95, "Critical"), (80, "Critical"), (60, "High"), (45, "Medium"), (10, "Low")],
)
def test_priority_level(score, level):
    assert priority.priority_level(score) == level
