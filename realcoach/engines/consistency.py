"""Consistency scoring for a user's daily outreach.

The input is one boolean per day, newest last: did the user complete their
assigned actions that day.
"""

import logging
from typing import List, Sequence

from realcoach.errors import ConfigurationError
from realcoach.models.records import ConsistencyRecord

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 7
DAILY_CONTACT_TARGET = 5
RECENT_DAYS = 7


def score(
    history: Sequence[bool], window_days: int = DEFAULT_WINDOW_DAYS
) -> ConsistencyRecord:
    """Score a daily completion history.

    Args:
        history: Completion flags, oldest first
        window_days: Trailing window used for the percentage score

    Returns:
        ConsistencyRecord; an empty history scores 0 with a 0 streak
    """
    if window_days < 1:
        raise ConfigurationError(f"window_days must be >= 1, got {window_days}")

    days = [bool(day) for day in history]
    if not days:
        return ConsistencyRecord(score=0, streak=0, last_7_days=[])

    # Days before the history starts count as misses
    window = days[-window_days:]
    percentage = round(100 * sum(window) / window_days)

    streak = 0
    for completed in reversed(days):
        if not completed:
            break
        streak += 1

    recent = days[-RECENT_DAYS:]
    recent = [False] * (RECENT_DAYS - len(recent)) + recent

    record = ConsistencyRecord(score=percentage, streak=streak, last_7_days=recent)
    logger.debug(f"Consistency score {record.score}, streak {record.streak}")
    return record


def completions_from_counts(
    counts: Sequence[int], daily_target: int = DAILY_CONTACT_TARGET
) -> List[bool]:
    """Turn per-day contact counts into completion flags (met the target or not)."""
    if daily_target < 1:
        raise ConfigurationError(f"daily_target must be >= 1, got {daily_target}")
    return [count >= daily_target for count in counts]


def consistency_message(score: int, streak: int) -> str:
    """Motivational line for the dashboard."""
    if score >= 90:
        if streak >= 7:
            return f"Amazing! {streak}-day streak and crushing it!"
        return "Excellent work! You're on fire!"
    if score >= 70:
        if streak >= 3:
            return f"Great consistency with a {streak}-day streak!"
        return "Good progress! Keep up the momentum."
    if score >= 50:
        return "You're getting there. A bit more consistency and you'll be unstoppable!"
    return "Every contact counts. Start your streak today!"


def consistency_recommendations(score: int, streak: int) -> List[str]:
    recommendations = []

    if streak == 0:
        recommendations.append("Start your streak today - complete your daily actions!")
    elif streak < 3:
        recommendations.append(f"You have a {streak}-day streak. Keep it going to hit 3 days!")
    elif streak < 7:
        recommendations.append(
            f"{streak}-day streak! Only {7 - streak} more days to a full week."
        )
    else:
        recommendations.append(f"Incredible {streak}-day streak! Maintain this excellence.")

    if score < 70:
        recommendations.append("Focus on your top priority contacts each day.")
        recommendations.append("Set a reminder to make your contacts at the same time daily.")

    if score < 50:
        recommendations.append("Review your pipeline and identify your hottest leads.")
        recommendations.append("Consider blocking time on your calendar for outreach.")

    return recommendations
