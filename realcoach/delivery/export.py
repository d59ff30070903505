"""Flatten daily priorities into rows for JSON/CSV export."""

import logging
from typing import Any, Dict, List

from realcoach.engines.recommender import urgency_level
from realcoach.models.records import DailyPriorities

logger = logging.getLogger(__name__)


def format_priorities_for_export(daily: DailyPriorities) -> List[Dict[str, Any]]:
    """Format prioritized contacts as flat rows.

    Args:
        daily: Result of build_daily_priorities

    Returns:
        List of dicts, one per contact, in ranked order
    """
    rows = []

    for rank, item in enumerate(daily.priorities, start=1):
        contact = item.contact
        row = {
            "rank": rank,
            "contact_id": contact.contact_id or "",
            "name": contact.name or "",
            "pipeline_stage": contact.pipeline_stage.value,
            "motivation_level": contact.motivation_level.value,
            "timeframe": contact.timeframe.value,
            "days_since_contact": contact.days_since_contact,
            "priority_score": item.priority_score,
            "priority_level": item.priority_level,
            "seven_day_flag": item.seven_day.should_flag,
            "seven_day_reason": item.seven_day.reason or "",
            "action_type": item.action.action_type.value,
            "urgency": item.action.urgency,
            "urgency_level": urgency_level(item.action.urgency),
            "script": item.action.script,
            "rationale": item.action.rationale,
            "behavioral_factors": "; ".join(item.action.behavioral_factors),
        }
        rows.append(row)

    logger.info(f"Formatted {len(rows)} priorities for export")
    return rows
