"""Build the "needs attention today" list from a batch of contacts."""

import logging
from typing import Any, Iterable, Mapping, Union

from realcoach.engines import priority, recommender, seven_day
from realcoach.errors import ConfigurationError
from realcoach.models.records import ContactSnapshot, DailyPriorities, PrioritizedContact

logger = logging.getLogger(__name__)

DEFAULT_MINIMUM_PRIORITY = 30
DEFAULT_MAXIMUM_DAILY_ACTIONS = 10


def evaluate_contact(
    contact: ContactSnapshot, threshold_days: int = seven_day.SEVEN_DAY_THRESHOLD
) -> PrioritizedContact:
    """Run the monitor, scorer and recommender for one contact."""
    check = seven_day.check(contact, threshold_days)
    score = priority.score(contact, check)
    action = recommender.recommend(contact, check)
    return PrioritizedContact(
        contact=contact,
        priority_score=score,
        priority_level=priority.priority_level(score),
        seven_day=check,
        action=action,
    )


def build_daily_priorities(
    contacts: Iterable[Union[ContactSnapshot, Mapping[str, Any]]],
    minimum_priority: int = DEFAULT_MINIMUM_PRIORITY,
    maximum_daily_actions: int = DEFAULT_MAXIMUM_DAILY_ACTIONS,
    threshold_days: int = seven_day.SEVEN_DAY_THRESHOLD,
) -> DailyPriorities:
    """Score, filter and rank contacts for today.

    A contact that fails validation is logged and recorded in ``skipped``;
    the rest of the batch is still evaluated. Ties keep input order.

    Args:
        contacts: Snapshots, or storage rows parsed with ContactSnapshot.from_dict
        minimum_priority: Lowest score included in the list
        maximum_daily_actions: Maximum list size
        threshold_days: Seven-day rule threshold

    Returns:
        DailyPriorities with the top contacts, skipped contacts and a summary
    """
    if maximum_daily_actions < 0:
        raise ConfigurationError(
            f"maximum_daily_actions must be >= 0, got {maximum_daily_actions}"
        )

    result = DailyPriorities()
    evaluated = []
    total = 0

    for item in contacts:
        total += 1
        contact_id = _contact_id(item)
        try:
            contact = (
                item
                if isinstance(item, ContactSnapshot)
                else ContactSnapshot.from_dict(item)
            )
            evaluated.append(evaluate_contact(contact, threshold_days))
        except ConfigurationError as e:
            logger.warning(f"Skipping contact {contact_id}: {e}")
            result.skipped.append((contact_id, str(e)))

    qualifying = [p for p in evaluated if p.priority_score >= minimum_priority]
    # sorted() is stable, so equal scores keep input order
    qualifying = sorted(qualifying, key=lambda p: p.priority_score, reverse=True)
    result.priorities = qualifying[:maximum_daily_actions]

    result.summary = {
        "total_contacts": total,
        "prioritized_contacts": len(qualifying),
        "critical_count": sum(1 for p in qualifying if p.priority_level == "Critical"),
        "high_count": sum(1 for p in qualifying if p.priority_level == "High"),
        "seven_day_violations": sum(1 for p in qualifying if p.seven_day.should_flag),
        "avg_priority_score": (
            round(sum(p.priority_score for p in qualifying) / len(qualifying))
            if qualifying
            else 0
        ),
    }

    logger.info(
        f"Daily priorities: {len(result.priorities)} of {total} contacts "
        f"({len(result.skipped)} skipped)"
    )
    return result


def _contact_id(item: Union[ContactSnapshot, Mapping[str, Any]]):
    if isinstance(item, ContactSnapshot):
        return item.contact_id
    value = item.get("contact_id", item.get("id"))
    return str(value) if value is not None else None
