"""Data records read and produced by the RealCoach engines."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from realcoach.errors import ConfigurationError
from realcoach.models.enums import (
    ActionType,
    MotivationLevel,
    PipelineStage,
    Timeframe,
    parse_motivation,
    parse_stage,
    parse_timeframe,
)


def _parse_days(value: Any, field_name: str = "days_since_contact") -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid {field_name}: {value!r}")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int):
        raise ConfigurationError(f"Invalid {field_name}: {value!r}")
    if value < 0:
        raise ConfigurationError(f"{field_name} must be >= 0, got {value}")
    return value


def _parse_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1", "y")
    return bool(value)


@dataclass(frozen=True)
class ContactSnapshot:
    """Read-only view of a contact, as loaded by the caller."""

    pipeline_stage: PipelineStage
    days_since_contact: int = 0
    motivation_level: MotivationLevel = MotivationLevel.UNKNOWN
    timeframe: Timeframe = Timeframe.UNKNOWN
    preapproval_status: bool = False
    priority_score: int = 0  # cached; never an input to scoring
    seven_day_rule_flag: bool = False
    contact_id: Optional[str] = None
    name: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "pipeline_stage", parse_stage(self.pipeline_stage))
        object.__setattr__(
            self, "motivation_level", parse_motivation(self.motivation_level)
        )
        object.__setattr__(self, "timeframe", parse_timeframe(self.timeframe))
        object.__setattr__(
            self, "days_since_contact", _parse_days(self.days_since_contact)
        )
        if self.name is not None:
            object.__setattr__(self, "name", str(self.name))

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> "ContactSnapshot":
        """Build a snapshot from a storage row (column names as stored).

        Args:
            row: Mapping with pipeline_stage, days_since_contact, etc.

        Returns:
            Validated ContactSnapshot
        """
        if row.get("pipeline_stage") is None:
            raise ConfigurationError("Missing pipeline stage")
        if row.get("days_since_contact") is None:
            raise ConfigurationError("Missing days_since_contact")

        try:
            priority_score = int(row.get("priority_score") or 0)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid priority_score: {e}") from e

        contact_id = row.get("contact_id", row.get("id"))
        return cls(
            pipeline_stage=row["pipeline_stage"],
            days_since_contact=row["days_since_contact"],
            motivation_level=row.get("motivation_level"),
            timeframe=row.get("timeframe"),
            preapproval_status=_parse_bool(row.get("preapproval_status", False)),
            priority_score=priority_score,
            seven_day_rule_flag=_parse_bool(row.get("seven_day_rule_flag", False)),
            contact_id=str(contact_id) if contact_id is not None else None,
            name=row.get("name"),
        )


@dataclass
class SevenDayCheck:
    """Outcome of the seven-day rule check for one contact."""

    should_flag: bool
    days_since_contact: int
    reason: Optional[str] = None


@dataclass
class RecommendedAction:
    """Next outreach action suggested for a contact."""

    action_type: ActionType
    urgency: int  # 1-10
    script: str
    rationale: str
    behavioral_factors: List[str] = field(default_factory=list)


@dataclass
class PipelineAnalysis:
    """Evidence about a contact, derived from a newly logged interaction."""

    current_stage: PipelineStage
    has_timeframe: bool = False
    has_specific_property: bool = False
    motivation: MotivationLevel = MotivationLevel.UNKNOWN
    has_showings: bool = False
    days_since_last_activity: int = 0
    offer_accepted: bool = False
    closing_completed: bool = False

    def __post_init__(self):
        self.current_stage = parse_stage(self.current_stage)
        self.motivation = parse_motivation(self.motivation)
        self.days_since_last_activity = _parse_days(
            self.days_since_last_activity, "days_since_last_activity"
        )


@dataclass
class StageTransitionEvaluation:
    """Advisor verdict. confidence 0 with an unchanged stage means no change."""

    new_stage: PipelineStage
    confidence: int
    rationale: str


@dataclass
class ConsistencyRecord:
    """Rolling engagement summary for one user."""

    score: int
    streak: int
    last_7_days: List[bool] = field(default_factory=list)

    @property
    def rating(self) -> str:
        if self.score >= 90:
            return "Excellent"
        if self.score >= 70:
            return "Good"
        if self.score >= 50:
            return "Needs Improvement"
        return "Critical"


@dataclass
class PrioritizedContact:
    """A contact with everything the daily list needs to show it."""

    contact: ContactSnapshot
    priority_score: int
    priority_level: str
    seven_day: SevenDayCheck
    action: RecommendedAction


@dataclass
class DailyPriorities:
    """The "needs attention today" list."""

    priorities: List[PrioritizedContact] = field(default_factory=list)
    skipped: List[Tuple[Optional[str], str]] = field(default_factory=list)
    summary: Dict[str, int] = field(default_factory=dict)
