"""Shared fixtures for RealCoach engine tests."""

import pytest

from realcoach.models.records import ContactSnapshot


@pytest.fixture
def make_contact():
    """Factory for contact snapshots with neutral defaults."""

    def _make(**overrides):
        fields = {
            "contact_id": "c-1",
            "name": "Test Contact",
            "pipeline_stage": "Lead",
            "days_since_contact": 0,
            "motivation_level": None,
            "timeframe": None,
            "preapproval_status": False,
            "priority_score": 0,
            "seven_day_rule_flag": False,
        }
        fields.update(overrides)
        return ContactSnapshot(**fields)

    return _make
