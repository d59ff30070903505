"""Outreach script templates for recommended actions."""

import zlib
from typing import List, Optional

from realcoach.models.enums import Timeframe
from realcoach.models.records import ContactSnapshot

REENGAGEMENT_TEMPLATES = [
    "Hi {name}, it's been {days} days since we last spoke and I wanted to check in. "
    "The market is moving quickly and I want to make sure you're seeing the latest "
    "opportunities. Are you still actively looking?",
    "{name}, it's been {days} days since we last connected. I have some new listings "
    "that match your criteria. When's a good time to discuss?",
    "Hi {name}, just touching base after {days} days. With the market changing weekly, "
    "I want to make sure you're positioned to act when the right property comes along. "
    "How's your search going?",
]

STALE_LEAD = (
    "Hi {name}, it's been {days} days since we connected. I wanted to check in - "
    "are you still looking to {goal}?"
)
QUALIFY_TIMEFRAME = (
    "Hi {name}, I'd love to understand your timeframe better. Are you looking to "
    "make a move in the next few months, or is this more long-term?"
)
LONG_HORIZON = (
    "Hi {name}, I know you're planning a few months out. I'll keep an eye on the "
    "market for you - would a monthly update on prices in your area be helpful?"
)
NURTURE_LEAD = (
    "Hi {name}, I came across some opportunities that might interest you. Do you "
    "have a few minutes to chat about what you're looking for?"
)
QUALIFY_LEAD = (
    "Hi {name}, following up on our conversation. What questions can I answer "
    "about your real estate goals?"
)
PREAPPROVAL = (
    "Hi {name}, to make your offers as strong as possible it's important we get "
    "your pre-approval in place. Have you spoken with a lender yet?"
)
MOMENTUM_CHECK = (
    "Hi {name}, I know you're motivated to {goal}. I want to make sure I'm "
    "providing the best service. When can we connect?"
)
REQUIREMENTS_MEETING = (
    "Hi {name}, I'd like to better understand exactly what you're looking for. "
    "Can we schedule a quick meeting to go over your must-haves vs. nice-to-haves?"
)
SEND_LISTING = (
    "Hi {name}, based on what we discussed, I found a property that matches your "
    "criteria. Would you like me to send over the details?"
)
ACTIVE_CHECK_IN = (
    "Hi {name}, just checking in. Any updates on your end? I'm seeing some new "
    "inventory hit the market."
)
ACTIVE_MOMENTUM = (
    "Hi {name}, the market is moving quickly - should I send you fresh listings "
    "or schedule another showing?"
)
CLOSING_SUPPORT = (
    "Hi {name}, checking in on your closing progress. Any questions or updates "
    "from the lender or title company?"
)
REVIEW_REQUEST = (
    "Hi {name}, thank you again for choosing me as your agent. Would you be "
    "willing to share a brief review of your experience? It would mean a lot to me."
)
REFERRAL_REQUEST = (
    "Hi {name}, I hope you're enjoying your new home! If you know anyone looking "
    "to buy or sell, I'd appreciate the introduction."
)
RELATIONSHIP_CHECK_IN = (
    "Hi {name}, just checking in. How are you enjoying your home? Is there "
    "anything I can help you with?"
)


def first_name(full_name: Optional[str]) -> str:
    """First word of a contact's name, or "there" when unknown."""
    if not full_name or not full_name.strip():
        return "there"
    return full_name.strip().split()[0]


def goal_phrase(timeframe: Timeframe) -> str:
    """Short phrase for what the contact is planning to do."""
    if timeframe == Timeframe.UNKNOWN:
        return "buy or sell"
    if timeframe == Timeframe.IMMEDIATE:
        return "move right away"
    return f"move in the next {timeframe.value}"


def pick_variant(templates: List[str], contact_id: Optional[str]) -> str:
    """Choose a template deterministically from the contact id."""
    key = (contact_id or "").encode("utf-8")
    return templates[zlib.crc32(key) % len(templates)]


def render(template: str, contact: ContactSnapshot) -> str:
    """Fill a template with the contact's name, day count and goal."""
    return template.format(
        name=first_name(contact.name),
        days=contact.days_since_contact,
        goal=goal_phrase(contact.timeframe),
    )
