"""Priority score calculator.

Scores a contact 0-100 for daily attention. Each signal is normalised to
[0, 1] and multiplied by its point weight; the weights add up to 100.

    Motivation   25 pts  High=1.0, Medium=0.6, Low/unknown=0.3
    Attention    25 pts  0.2 up to 2 days stale, rising linearly to 1.0 at 14
    Timeframe    20 pts  Immediate=1.0 ... 6+ months=0.2, unknown=0.3
    Stage        30 pts  Active=1.0, Under Contract=0.9, New=0.7, Lead=0.4
    7-day rule  +20 pts  when flagged, before clamping

Attention rewards staleness: the longer a contact goes untouched the more
it needs outreach, so it ranks higher. Closed contacts get a fixed low
baseline since they are worked on a referral cadence instead.
"""

import logging
import math
from typing import Optional

from realcoach.errors import ConfigurationError
from realcoach.models.enums import MotivationLevel, PipelineStage, Timeframe
from realcoach.models.records import ContactSnapshot, SevenDayCheck

logger = logging.getLogger(__name__)

MOTIVATION_WEIGHT = 25
ATTENTION_WEIGHT = 25
TIMEFRAME_WEIGHT = 20
STAGE_WEIGHT = 30
SEVEN_DAY_BONUS = 20
CLOSED_BASELINE_SCORE = 10

RECENCY_WINDOW_DAYS = 2
STALE_HORIZON_DAYS = 14
ATTENTION_FLOOR = 0.2

MOTIVATION_SIGNAL = {
    MotivationLevel.HIGH: 1.0,
    MotivationLevel.MEDIUM: 0.6,
    MotivationLevel.LOW: 0.3,
    MotivationLevel.UNKNOWN: 0.3,
}

TIMEFRAME_SIGNAL = {
    Timeframe.IMMEDIATE: 1.0,
    Timeframe.ONE_TO_THREE_MONTHS: 0.7,
    Timeframe.THREE_TO_SIX_MONTHS: 0.5,
    Timeframe.SIX_PLUS_MONTHS: 0.2,
    Timeframe.UNKNOWN: 0.3,
}

STAGE_SIGNAL = {
    PipelineStage.LEAD: 0.4,
    PipelineStage.NEW_OPPORTUNITY: 0.7,
    PipelineStage.ACTIVE_OPPORTUNITY: 1.0,
    PipelineStage.UNDER_CONTRACT: 0.9,
}


def _signal(table: dict, key, field: str) -> float:
    try:
        return table[key]
    except KeyError:
        raise ConfigurationError(f"Unrecognized {field}: {key!r}") from None


def attention_signal(days_since_contact: int) -> float:
    """Normalised staleness: ATTENTION_FLOOR inside the recency window, 1.0 at the horizon."""
    if days_since_contact <= RECENCY_WINDOW_DAYS:
        return ATTENTION_FLOOR
    span = STALE_HORIZON_DAYS - RECENCY_WINDOW_DAYS
    ramp = min(1.0, (days_since_contact - RECENCY_WINDOW_DAYS) / span)
    return ATTENTION_FLOOR + (1.0 - ATTENTION_FLOOR) * ramp


def score(contact: ContactSnapshot, seven_day: Optional[SevenDayCheck] = None) -> int:
    """Calculate the priority score for a contact.

    Args:
        contact: Contact snapshot
        seven_day: Monitor result; when omitted the snapshot's cached
            seven_day_rule_flag is used

    Returns:
        Integer score in [0, 100]
    """
    if contact.pipeline_stage == PipelineStage.CLOSED:
        return CLOSED_BASELINE_SCORE

    total = (
        MOTIVATION_WEIGHT
        * _signal(MOTIVATION_SIGNAL, contact.motivation_level, "motivation level")
        + ATTENTION_WEIGHT * attention_signal(contact.days_since_contact)
        + TIMEFRAME_WEIGHT
        * _signal(TIMEFRAME_SIGNAL, contact.timeframe, "timeframe")
        + STAGE_WEIGHT * _signal(STAGE_SIGNAL, contact.pipeline_stage, "pipeline stage")
    )

    flagged = seven_day.should_flag if seven_day is not None else contact.seven_day_rule_flag
    if flagged:
        total += SEVEN_DAY_BONUS

    result = max(0, min(100, math.floor(total + 0.5)))
    logger.debug(f"Priority score for {contact.contact_id}: {result}")
    return result


def priority_level(score: int) -> str:
    """Get priority category for a score."""
    if score >= 80:
        return "Critical"
    if score >= 60:
        return "High"
    if score >= 40:
        return "Medium"
    return "Low"
