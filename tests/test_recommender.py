"""Tests for the next-action recommendation engine."""

import itertools
from types import SimpleNamespace

import pytest

from realcoach.engines import recommender, seven_day
from realcoach.errors import ConfigurationError
from realcoach.models.enums import ActionType, MotivationLevel, PipelineStage, Timeframe


class TestLead:
    def test_stale_lead_gets_urgent_call(self, make_contact):
        contact = make_contact(
            pipeline_stage="Lead",
            days_since_contact=10,
            motivation_level="High",
            timeframe="1-3 months",
        )
        action = recommender.recommend(contact, seven_day.check(contact))

        assert action.action_type == ActionType.CALL
        assert action.urgency >= 8
        assert "10 days" in action.script

    def test_stale_lead_follows_monitor_threshold(self, make_contact):
        contact = make_contact(
            pipeline_stage="Lead",
            days_since_contact=8,
            motivation_level="High",
            timeframe="1-3 months",
        )
        action = recommender.recommend(contact, seven_day.check(contact, threshold_days=10))

        assert action.action_type == ActionType.CALL
        assert action.urgency == 7
        assert "8 Days Since Contact" not in action.behavioral_factors
        assert "7-Day Rule Violation" not in action.behavioral_factors

    def test_unknown_timeframe_asks_to_qualify(self, make_contact):
        contact = make_contact(
            pipeline_stage="Lead", days_since_contact=2, motivation_level="High", timeframe=None
        )
        action = recommender.recommend(contact)

        assert action.action_type == ActionType.CALL
        assert "timeframe" in action.script
        assert "No timeframe" in action.rationale

    def test_long_timeframe_is_called_out(self, make_contact):
        contact = make_contact(
            pipeline_stage="Lead",
            days_since_contact=1,
            motivation_level="Medium",
            timeframe="6+ months",
        )
        action = recommender.recommend(contact)

        assert action.action_type == ActionType.CALL
        assert "Long timeframe" in action.rationale
        assert "Long Timeframe" in action.behavioral_factors

    def test_medium_motivation_gets_nurture(self, make_contact):
        contact = make_contact(
            pipeline_stage="Lead",
            days_since_contact=3,
            motivation_level="Medium",
            timeframe="3-6 months",
        )
        action = recommender.recommend(contact)

        assert action.action_type == ActionType.FOLLOW_UP
        assert action.urgency < 8
        assert "Medium Motivation" in action.behavioral_factors

    def test_behavioral_factors_in_evaluation_order(self, make_contact):
        contact = make_contact(
            pipeline_stage="Lead",
            days_since_contact=10,
            motivation_level="High",
            timeframe="1-3 months",
        )
        action = recommender.recommend(contact)

        assert action.behavioral_factors == [
            "Lead",
            "10 Days Since Contact",
            "7-Day Rule Violation",
            "High Motivation",
        ]


class TestNewOpportunity:
    def test_missing_preapproval(self, make_contact):
        contact = make_contact(
            pipeline_stage="New Opportunity",
            days_since_contact=2,
            motivation_level="High",
            timeframe="Immediate",
            preapproval_status=False,
        )
        action = recommender.recommend(contact)

        assert action.action_type == ActionType.CALL
        assert action.urgency >= 7
        assert "pre-approval" in action.script
        assert action.behavioral_factors == [
            "New Opportunity",
            "Missing Pre-approval",
            "High Motivation",
            "Immediate Timeframe",
            "Recent Contact",
        ]

    def test_preapproval_lowers_urgency(self, make_contact):
        contact = make_contact(
            pipeline_stage="New Opportunity",
            days_since_contact=2,
            motivation_level="High",
            timeframe="Immediate",
            preapproval_status=True,
        )
        action = recommender.recommend(contact)

        assert action.urgency < 7

    def test_missing_preapproval_with_low_motivation_still_urgent(self, make_contact):
        contact = make_contact(
            pipeline_stage="New Opportunity", motivation_level="Low", preapproval_status=False
        )
        assert recommender.recommend(contact).urgency >= 7

    @pytest.mark.parametrize("days", [0, 5, 9, 30])
    def test_preapproved_stays_below_seven(self, make_contact, days):
        contact = make_contact(
            pipeline_stage="New Opportunity",
            days_since_contact=days,
            motivation_level="High",
            preapproval_status=True,
        )
        assert recommender.recommend(contact).urgency < 7


class TestActiveOpportunity:
    def test_seven_day_violation_is_critical(self, make_contact):
        contact = make_contact(
            pipeline_stage="Active Opportunity",
            days_since_contact=8,
            motivation_level="High",
            timeframe="Immediate",
            preapproval_status=True,
            seven_day_rule_flag=True,
        )
        action = recommender.recommend(contact)

        assert action.action_type == ActionType.CALL
        assert action.urgency == 10
        assert "CRITICAL" in action.rationale
        assert "7-day rule" in action.rationale

    def test_cached_flag_alone_escalates(self, make_contact):
        contact = make_contact(
            pipeline_stage="Active Opportunity", days_since_contact=2, seven_day_rule_flag=True
        )
        assert recommender.recommend(contact).urgency == 10

    def test_regular_engagement_below_ten(self, make_contact):
        contact = make_contact(
            pipeline_stage="Active Opportunity",
            days_since_contact=3,
            motivation_level="High",
            timeframe="1-3 months",
            preapproval_status=True,
        )
        action = recommender.recommend(contact)

        assert action.action_type == ActionType.SEND_LISTING
        assert action.urgency < 10
        assert "Active Showing Phase" in action.behavioral_factors

    def test_pre_threshold_check_in(self, make_contact):
        contact = make_contact(pipeline_stage="Active Opportunity", days_since_contact=5)
        action = recommender.recommend(contact)

        assert action.action_type == ActionType.TEXT
        assert action.urgency < 10


def test_under_contract_sends_reassurance_text(make_contact):
    contact = make_contact(
        pipeline_stage="Under Contract",
        days_since_contact=5,
        motivation_level="High",
        timeframe="Immediate",
        preapproval_status=True,
    )
    action = recommender.recommend(contact)

    assert action.action_type == ActionType.TEXT
    assert action.urgency < 6
    assert "closing" in action.script


class TestClosed:
    def test_recent_close_asks_for_review(self, make_contact):
        action = recommender.recommend(
            make_contact(pipeline_stage="Closed", days_since_contact=5, preapproval_status=True)
        )
        assert action.action_type == ActionType.EMAIL
        assert "review" in action.script

    def test_older_close_gets_maintenance(self, make_contact):
        action = recommender.recommend(
            make_contact(pipeline_stage="Closed", days_since_contact=60, preapproval_status=True)
        )
        assert action.urgency < 5
        assert "review" not in action.script

    def test_long_term_relationship(self, make_contact):
        action = recommender.recommend(make_contact(pipeline_stage="Closed", days_since_contact=400))
        assert "Relationship Maintenance" in action.behavioral_factors
        assert action.urgency < 5

    def test_stale_cached_flag_is_ignored(self, make_contact):
        action = recommender.recommend(
            make_contact(pipeline_stage="Closed", days_since_contact=10, seven_day_rule_flag=True)
        )
        assert "7-Day Rule Violation" not in action.behavioral_factors


def test_unrecognized_stage_is_rejected():
    contact = SimpleNamespace(
        pipeline_stage="Prospect",
        days_since_contact=3,
        seven_day_rule_flag=False,
        contact_id="x",
    )
    no_flag = seven_day.SevenDayCheck(should_flag=False, days_since_contact=3)
    with pytest.raises(ConfigurationError, match="pipeline stage"):
        recommender.recommend(contact, no_flag)


def test_urgency_in_range_for_every_combination(make_contact):
    for stage, motivation, timeframe, days, preapproved, flag in itertools.product(
        PipelineStage,
        MotivationLevel,
        Timeframe,
        (0, 3, 6, 7, 31, 91),
        (False, True),
        (False, True),
    ):
        contact = make_contact(
            pipeline_stage=stage,
            motivation_level=motivation,
            timeframe=timeframe,
            days_since_contact=days,
            preapproval_status=preapproved,
            seven_day_rule_flag=flag,
        )
        action = recommender.recommend(contact)
        assert 1 <= action.urgency <= 10
        assert action.rationale
        assert action.behavioral_factors[0] == stage.value


def test_recommend_is_deterministic(make_contact):
    contact = make_contact(
        contact_id="abc-123", pipeline_stage="Active Opportunity", days_since_contact=9
    )
    assert recommender.recommend(contact) == recommender.recommend(contact)


def test_script_uses_first_name(make_contact):
    action = recommender.recommend(make_contact(name="Jordan Avery", pipeline_stage="Under Contract"))
    assert action.script.startswith("Hi Jordan,")


def test_recommend_batch_preserves_order(make_contact):
    contacts = [
        make_contact(contact_id="a", pipeline_stage="Closed", days_since_contact=2),
        make_contact(contact_id="b", pipeline_stage="Under Contract"),
    ]
    actions = recommender.recommend_batch(contacts)
    assert [a.action_type for a in actions] == [ActionType.EMAIL, ActionType.TEXT]


@pytest.mark.parametrize("urgency,level", [(10, "Critical"), (7, "High"), (5, "Medium"), (2, "Low")])
def test_urgency_level(urgency, level):
    assert recommender.urgency_level(urgency) == level
