"""Pipeline stage, motivation, timeframe and action type enums."""

from enum import Enum
from typing import Any, Optional, Type, TypeVar

from realcoach.errors import ConfigurationError

E = TypeVar("E", bound=Enum)


class PipelineStage(Enum):
    """Ordered phases of a sales relationship."""

    LEAD = "Lead"
    NEW_OPPORTUNITY = "New Opportunity"
    ACTIVE_OPPORTUNITY = "Active Opportunity"
    UNDER_CONTRACT = "Under Contract"
    CLOSED = "Closed"


class MotivationLevel(Enum):
    """How likely the contact is to transact."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    UNKNOWN = "unknown"


class Timeframe(Enum):
    """When the contact expects to buy or sell."""

    IMMEDIATE = "Immediate"
    ONE_TO_THREE_MONTHS = "1-3 months"
    THREE_TO_SIX_MONTHS = "3-6 months"
    SIX_PLUS_MONTHS = "6+ months"
    UNKNOWN = "unknown"


class ActionType(Enum):
    """Outreach channels the recommender can suggest."""

    CALL = "Call"
    TEXT = "Text"
    EMAIL = "Email"
    MEETING = "Meeting"
    SEND_LISTING = "Send Listing"
    FOLLOW_UP = "Follow-up"


# Stage ordering, earliest first
STAGE_ORDER = [
    PipelineStage.LEAD,
    PipelineStage.NEW_OPPORTUNITY,
    PipelineStage.ACTIVE_OPPORTUNITY,
    PipelineStage.UNDER_CONTRACT,
    PipelineStage.CLOSED,
]


def stage_index(stage: PipelineStage) -> int:
    """Position of a stage in the pipeline (Lead is 0)."""
    return STAGE_ORDER.index(stage)


def next_stage(stage: PipelineStage) -> Optional[PipelineStage]:
    """Get the adjacent forward stage, or None for Closed."""
    index = stage_index(stage)
    if index + 1 >= len(STAGE_ORDER):
        return None
    return STAGE_ORDER[index + 1]


def _parse(enum_cls: Type[E], value: Any, field: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Unrecognized {field}: {value!r}") from None


def parse_stage(value: Any) -> PipelineStage:
    """Parse a pipeline stage. There is no unknown stage."""
    return _parse(PipelineStage, value, "pipeline stage")


def parse_motivation(value: Any) -> MotivationLevel:
    """Parse a motivation level; absent values map to UNKNOWN."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return MotivationLevel.UNKNOWN
    return _parse(MotivationLevel, value, "motivation level")


def parse_timeframe(value: Any) -> Timeframe:
    """Parse a timeframe; absent values map to UNKNOWN."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return Timeframe.UNKNOWN
    return _parse(Timeframe, value, "timeframe")
