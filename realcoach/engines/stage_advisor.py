"""Pipeline stage advisor.

Decides whether new interaction evidence justifies moving a contact one
stage forward. It never skips a stage and never moves a contact back;
backward moves are a manual override made by the caller.
"""

import logging

from realcoach.models.enums import MotivationLevel, PipelineStage, next_stage
from realcoach.models.records import PipelineAnalysis, StageTransitionEvaluation

logger = logging.getLogger(__name__)

ACTIVE_ENGAGEMENT_DAYS = 7

LEAD_CONFIDENCE = 85
NEW_OPPORTUNITY_CONFIDENCE = 90
ACTIVE_OPPORTUNITY_CONFIDENCE = 95
UNDER_CONTRACT_CONFIDENCE = 100


def evaluate(analysis: PipelineAnalysis) -> StageTransitionEvaluation:
    """Evaluate advancement criteria for the contact's current stage.

    Args:
        analysis: Current stage plus evidence derived from conversations

    Returns:
        StageTransitionEvaluation; confidence 0 and the current stage when
        no advancement is warranted
    """
    stage = analysis.current_stage

    if stage == PipelineStage.LEAD:
        if (
            analysis.has_timeframe
            and analysis.has_specific_property
            and analysis.motivation == MotivationLevel.HIGH
        ):
            return _advance(
                analysis,
                LEAD_CONFIDENCE,
                "Meets criteria: High motivation + timeframe + specific property",
            )

    elif stage == PipelineStage.NEW_OPPORTUNITY:
        if (
            analysis.has_showings
            and analysis.days_since_last_activity <= ACTIVE_ENGAGEMENT_DAYS
        ):
            return _advance(
                analysis,
                NEW_OPPORTUNITY_CONFIDENCE,
                "Active showings + engagement within 7 days",
            )

    elif stage == PipelineStage.ACTIVE_OPPORTUNITY:
        if analysis.offer_accepted:
            return _advance(
                analysis,
                ACTIVE_OPPORTUNITY_CONFIDENCE,
                "Offer accepted by seller",
            )

    elif stage == PipelineStage.UNDER_CONTRACT:
        if analysis.closing_completed:
            return _advance(
                analysis,
                UNDER_CONTRACT_CONFIDENCE,
                "Closing completed successfully",
            )

    return StageTransitionEvaluation(new_stage=stage, confidence=0, rationale="No change")


def _advance(
    analysis: PipelineAnalysis, confidence: int, rationale: str
) -> StageTransitionEvaluation:
    new_stage = next_stage(analysis.current_stage)
    logger.debug(
        f"Advancing {analysis.current_stage.value} -> {new_stage.value} "
        f"({confidence}% confidence)"
    )
    return StageTransitionEvaluation(
        new_stage=new_stage, confidence=confidence, rationale=rationale
    )
