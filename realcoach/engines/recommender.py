"""Next-action recommendation engine.

One handler per pipeline stage picks the action, urgency, script and
rationale. Handlers record the conditions they evaluated true as behavioral
factors; contextual factors are appended afterwards.
"""

import logging
from typing import Callable, Dict, List, Optional

from realcoach.engines import scripts
from realcoach.engines import seven_day as seven_day_monitor
from realcoach.errors import ConfigurationError
from realcoach.models.enums import ActionType, MotivationLevel, PipelineStage, Timeframe
from realcoach.models.records import ContactSnapshot, RecommendedAction, SevenDayCheck

logger = logging.getLogger(__name__)

MIN_URGENCY = 1
MAX_URGENCY = 10

RECENT_CONTACT_DAYS = 2
NEW_OPPORTUNITY_CHECK_IN_DAYS = 5
ACTIVE_LISTING_DAYS = 3
ACTIVE_CHECK_IN_DAYS = 6
TESTIMONIAL_WINDOW_DAYS = 30
REFERRAL_WINDOW_DAYS = 90


class _Factors:
    """Ordered, de-duplicated list of behavioral factor tags."""

    def __init__(self):
        self.tags: List[str] = []

    def add(self, tag: str):
        if tag not in self.tags:
            self.tags.append(tag)


def _action(
    action_type: ActionType,
    urgency: int,
    script: str,
    rationale: str,
    factors: _Factors,
) -> RecommendedAction:
    return RecommendedAction(
        action_type=action_type,
        urgency=max(MIN_URGENCY, min(MAX_URGENCY, urgency)),
        script=script,
        rationale=rationale,
        behavioral_factors=factors.tags,
    )


def _lead(contact: ContactSnapshot, flagged: bool, factors: _Factors) -> RecommendedAction:
    days = contact.days_since_contact

    if flagged:
        factors.add(f"{days} Days Since Contact")
        return _action(
            ActionType.CALL,
            9,
            scripts.render(scripts.STALE_LEAD, contact),
            f"Urgent: {days} days since contact with lead - at risk of going cold",
            factors,
        )

    if contact.timeframe == Timeframe.UNKNOWN:
        factors.add("No Timeframe")
        return _action(
            ActionType.CALL,
            6,
            scripts.render(scripts.QUALIFY_TIMEFRAME, contact),
            "Qualification needed: No timeframe established",
            factors,
        )

    if contact.timeframe == Timeframe.SIX_PLUS_MONTHS:
        factors.add("Long Timeframe")
        return _action(
            ActionType.CALL,
            5,
            scripts.render(scripts.LONG_HORIZON, contact),
            "Long timeframe: 6+ month horizon is uncertain - stay in touch to surface urgency",
            factors,
        )

    if contact.motivation_level != MotivationLevel.HIGH:
        factors.add(f"{contact.motivation_level.value.capitalize()} Motivation")
        return _action(
            ActionType.FOLLOW_UP,
            5,
            scripts.render(scripts.NURTURE_LEAD, contact),
            "Motivation building needed - nurture to uncover urgency",
            factors,
        )

    return _action(
        ActionType.CALL,
        7,
        scripts.render(scripts.QUALIFY_LEAD, contact),
        "Regular contact to maintain engagement and qualify opportunity",
        factors,
    )


def _new_opportunity(
    contact: ContactSnapshot, flagged: bool, factors: _Factors
) -> RecommendedAction:
    high_motivation = contact.motivation_level == MotivationLevel.HIGH

    if not contact.preapproval_status:
        factors.add("Missing Pre-approval")
        if high_motivation:
            factors.add("High Motivation")
        return _action(
            ActionType.CALL,
            8 if high_motivation else 7,
            scripts.render(scripts.PREAPPROVAL, contact),
            "Pre-approval required for offer submission - buyer is not ready to make offers",
            factors,
        )

    if flagged:
        factors.add("7-Day Rule Violation")
        return _action(
            ActionType.CALL,
            6,
            scripts.pick_variant(scripts.REENGAGEMENT_TEMPLATES, contact.contact_id).format(
                name=scripts.first_name(contact.name), days=contact.days_since_contact
            ),
            f"Pre-approved but past the 7-day rule ({contact.days_since_contact} days) - re-engage",
            factors,
        )

    if contact.days_since_contact >= NEW_OPPORTUNITY_CHECK_IN_DAYS and high_motivation:
        factors.add("High Motivation")
        factors.add(f"{contact.days_since_contact} Days Since Contact")
        return _action(
            ActionType.CALL,
            6,
            scripts.render(scripts.MOMENTUM_CHECK, contact),
            "High motivation + 5+ days since contact - check in to maintain momentum",
            factors,
        )

    factors.add("Requirements Gathering")
    return _action(
        ActionType.MEETING,
        5,
        scripts.render(scripts.REQUIREMENTS_MEETING, contact),
        "Pre-approved - gather detailed requirements to move toward Active Opportunity",
        factors,
    )


def _active_opportunity(
    contact: ContactSnapshot, flagged: bool, factors: _Factors
) -> RecommendedAction:
    days = contact.days_since_contact

    if flagged:
        factors.add("7-Day Rule Violation")
        return _action(
            ActionType.CALL,
            MAX_URGENCY,
            scripts.pick_variant(scripts.REENGAGEMENT_TEMPLATES, contact.contact_id).format(
                name=scripts.first_name(contact.name), days=days
            ),
            f"CRITICAL: 7-day rule violation - {days} days without contact, "
            "immediate re-engagement required",
            factors,
        )

    if days <= ACTIVE_LISTING_DAYS:
        factors.add("Recent Contact")
        return _action(
            ActionType.SEND_LISTING,
            6,
            scripts.render(scripts.SEND_LISTING, contact),
            "Active showing phase - provide value with relevant listings",
            factors,
        )

    if days <= ACTIVE_CHECK_IN_DAYS:
        factors.add("Pre-7-Day Check")
        return _action(
            ActionType.TEXT,
            5,
            scripts.render(scripts.ACTIVE_CHECK_IN, contact),
            "Maintain contact before the 7-day rule threshold",
            factors,
        )

    return _action(
        ActionType.CALL,
        7,
        scripts.render(scripts.ACTIVE_MOMENTUM, contact),
        "Maintain momentum in active showing phase",
        factors,
    )


def _under_contract(
    contact: ContactSnapshot, flagged: bool, factors: _Factors
) -> RecommendedAction:
    factors.add("Closing Support")
    return _action(
        ActionType.TEXT,
        5,
        scripts.render(scripts.CLOSING_SUPPORT, contact),
        "Under contract - low-touch reassurance through the closing process",
        factors,
    )


def _closed(contact: ContactSnapshot, flagged: bool, factors: _Factors) -> RecommendedAction:
    days = contact.days_since_contact

    if days <= TESTIMONIAL_WINDOW_DAYS:
        factors.add("Testimonial Request")
        return _action(
            ActionType.EMAIL,
            4,
            scripts.render(scripts.REVIEW_REQUEST, contact),
            "Post-closing: request a testimonial while the experience is fresh",
            factors,
        )

    if days <= REFERRAL_WINDOW_DAYS:
        factors.add("Referral Request")
        return _action(
            ActionType.EMAIL,
            3,
            scripts.render(scripts.REFERRAL_REQUEST, contact),
            "Post-closing: leverage satisfaction for referrals",
            factors,
        )

    factors.add("Relationship Maintenance")
    return _action(
        ActionType.EMAIL,
        2,
        scripts.render(scripts.RELATIONSHIP_CHECK_IN, contact),
        "Long-term relationship maintenance",
        factors,
    )


_STAGE_HANDLERS: Dict[
    PipelineStage, Callable[[ContactSnapshot, bool, _Factors], RecommendedAction]
] = {
    PipelineStage.LEAD: _lead,
    PipelineStage.NEW_OPPORTUNITY: _new_opportunity,
    PipelineStage.ACTIVE_OPPORTUNITY: _active_opportunity,
    PipelineStage.UNDER_CONTRACT: _under_contract,
    PipelineStage.CLOSED: _closed,
}


def _add_context_factors(contact: ContactSnapshot, flagged: bool, factors: _Factors):
    if flagged:
        factors.add("7-Day Rule Violation")
    if contact.motivation_level == MotivationLevel.HIGH:
        factors.add("High Motivation")
    if contact.timeframe == Timeframe.IMMEDIATE:
        factors.add("Immediate Timeframe")
    if contact.days_since_contact <= RECENT_CONTACT_DAYS:
        factors.add("Recent Contact")
    if contact.pipeline_stage == PipelineStage.ACTIVE_OPPORTUNITY:
        factors.add("Active Showing Phase")


def recommend(
    contact: ContactSnapshot, seven_day: Optional[SevenDayCheck] = None
) -> RecommendedAction:
    """Recommend the next outreach action for a contact.

    Args:
        contact: Contact snapshot
        seven_day: Monitor result for this contact; computed when omitted

    Returns:
        RecommendedAction with urgency in 1-10

    Raises:
        ConfigurationError: If the pipeline stage has no handler
    """
    handler = _STAGE_HANDLERS.get(contact.pipeline_stage)
    if handler is None:
        raise ConfigurationError(
            f"Unrecognized pipeline stage: {contact.pipeline_stage!r}"
        )

    if seven_day is None:
        seven_day = seven_day_monitor.check(contact)
    flagged = seven_day.should_flag or (
        contact.seven_day_rule_flag and contact.pipeline_stage != PipelineStage.CLOSED
    )

    factors = _Factors()
    factors.add(contact.pipeline_stage.value)
    action = handler(contact, flagged, factors)
    # action.behavioral_factors is factors.tags; context tags follow the branch tags
    _add_context_factors(contact, flagged, factors)

    logger.debug(
        f"Recommended {action.action_type.value} (urgency {action.urgency}) "
        f"for {contact.contact_id}"
    )
    return action


def recommend_batch(contacts: List[ContactSnapshot]) -> List[RecommendedAction]:
    """Recommend actions for many contacts, preserving input order."""
    return [recommend(contact) for contact in contacts]


def urgency_level(urgency: int) -> str:
    """Get urgency category for display."""
    if urgency >= 9:
        return "Critical"
    if urgency >= 7:
        return "High"
    if urgency >= 5:
        return "Medium"
    return "Low"
