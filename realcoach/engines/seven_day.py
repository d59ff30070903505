"""Seven-day rule monitor.

Any contact that is not Closed and has gone untouched for the threshold
number of days (7 by default) is flagged for escalated outreach.
"""

import logging
from typing import List, Optional

from realcoach.models.enums import PipelineStage
from realcoach.models.records import ContactSnapshot, SevenDayCheck

logger = logging.getLogger(__name__)

SEVEN_DAY_THRESHOLD = 7
WARNING_DAYS = 5


def check(
    contact: ContactSnapshot, threshold_days: int = SEVEN_DAY_THRESHOLD
) -> SevenDayCheck:
    """Check whether a contact violates the seven-day rule.

    Args:
        contact: Contact snapshot
        threshold_days: Days without contact that trigger the flag

    Returns:
        SevenDayCheck with a reason naming the stage and day count when flagged
    """
    days = contact.days_since_contact
    should_flag = (
        days >= threshold_days and contact.pipeline_stage != PipelineStage.CLOSED
    )

    reason = None
    if should_flag:
        reason = f"{contact.pipeline_stage.value} contact with no touch in {days} days"
        logger.debug(f"Seven-day rule flag for {contact.contact_id}: {reason}")

    return SevenDayCheck(should_flag=should_flag, days_since_contact=days, reason=reason)


def check_batch(
    contacts: List[ContactSnapshot], threshold_days: int = SEVEN_DAY_THRESHOLD
) -> List[SevenDayCheck]:
    """Check many contacts, preserving input order."""
    return [check(contact, threshold_days) for contact in contacts]


def violations(
    contacts: List[ContactSnapshot], threshold_days: int = SEVEN_DAY_THRESHOLD
) -> List[ContactSnapshot]:
    """Get the contacts that currently violate the rule."""
    return [c for c in contacts if check(c, threshold_days).should_flag]


def days_until_violation(
    contact: ContactSnapshot, threshold_days: int = SEVEN_DAY_THRESHOLD
) -> Optional[int]:
    """Days left before the contact is flagged; 0 once violated, None if Closed."""
    if contact.pipeline_stage == PipelineStage.CLOSED:
        return None
    return max(0, threshold_days - contact.days_since_contact)


def alert_level(
    contact: ContactSnapshot, threshold_days: int = SEVEN_DAY_THRESHOLD
) -> str:
    """Get "none", "warning" or "critical" for proactive alerts."""
    if contact.pipeline_stage == PipelineStage.CLOSED:
        return "none"
    if contact.days_since_contact >= threshold_days:
        return "critical"
    if contact.days_since_contact >= WARNING_DAYS:
        return "warning"
    return "none"


def escalation_message(
    contact: ContactSnapshot, threshold_days: int = SEVEN_DAY_THRESHOLD
) -> Optional[str]:
    """Headline for a flagged contact, or None if it is within the window."""
    if not check(contact, threshold_days).should_flag:
        return None

    days_over = contact.days_since_contact - threshold_days
    if days_over == 0:
        return (
            f"URGENT: {threshold_days}-day rule reached today. "
            "Contact immediately to maintain engagement."
        )
    return (
        f"CRITICAL: {days_over} days past {threshold_days}-day rule. "
        f"{contact.pipeline_stage.value} contact at risk of going cold."
    )
