"""Daily RealCoach run - builds today's priorities and consistency score.

Usage:
    python -m realcoach.daily_run

Outputs:
    output/latest_priorities.json   - Ranked "needs attention today" list
    output/latest_priorities.csv    - Same list, flattened for spreadsheets
    output/latest_consistency.json  - Consistency score, streak and rating
    output/latest_meta.json         - Run metadata and status
"""

import json
import logging
from datetime import datetime
from pathlib import Path

import pandas as pd

from realcoach.collectors.contact_loader import contact_rows, load_completion_history
from realcoach.config import Config, config
from realcoach.delivery.export import format_priorities_for_export
from realcoach.engines import consistency
from realcoach.prioritization import build_daily_priorities

logger = logging.getLogger(__name__)


def run_daily(cfg: Config) -> dict:
    """Execute the daily run and write its outputs.

    Args:
        cfg: Loaded configuration

    Returns:
        Run metadata (also written to latest_meta.json)
    """
    start_time = datetime.now()
    output_dir = Path(cfg.output_dir)

    logger.info("=" * 60)
    logger.info("RealCoach Daily Run")
    logger.info(f"Started: {start_time.isoformat()}")
    logger.info("=" * 60)

    output_dir.mkdir(parents=True, exist_ok=True)

    # Priorities
    rows = contact_rows(Path(cfg.contacts_file))
    if not rows:
        logger.warning("No contacts found. Export contacts to the contacts file first.")

    daily = build_daily_priorities(
        rows,
        minimum_priority=cfg.minimum_priority,
        maximum_daily_actions=cfg.maximum_daily_actions,
        threshold_days=cfg.seven_day_threshold_days,
    )
    export_rows = format_priorities_for_export(daily)
    _write_priorities(output_dir, export_rows, daily.summary)

    # Consistency
    history = load_completion_history(Path(cfg.activity_file), cfg.daily_contact_target)
    record = consistency.score(history, window_days=cfg.consistency_window_days)
    _write_consistency(output_dir, record)

    duration = (datetime.now() - start_time).total_seconds()
    meta = {
        "run_timestamp": start_time.isoformat(),
        "status": "success",
        "message": (
            f"Prioritized {len(daily.priorities)} of "
            f"{daily.summary['total_contacts']} contacts"
        ),
        "summary": daily.summary,
        "skipped": [
            {"contact_id": contact_id, "error": error}
            for contact_id, error in daily.skipped
        ],
        "consistency_score": record.score,
        "duration_seconds": round(duration, 1),
        "output_files": {
            "priorities": str(output_dir / "latest_priorities.json"),
            "priorities_csv": str(output_dir / "latest_priorities.csv"),
            "consistency": str(output_dir / "latest_consistency.json"),
            "meta": str(output_dir / "latest_meta.json"),
        },
    }
    path = output_dir / "latest_meta.json"
    path.write_text(json.dumps(meta, indent=2), encoding="utf-8")
    logger.info(f"Metadata written to {path}")

    logger.info("=" * 60)
    logger.info("Daily Run Complete")
    logger.info(f"Duration: {duration:.1f} seconds")
    logger.info(f"Priorities: {len(daily.priorities)}, skipped: {len(daily.skipped)}")
    logger.info(f"Consistency: {record.score} ({record.rating}), streak {record.streak}")
    logger.info("=" * 60)

    return meta


def _write_priorities(output_dir: Path, rows: list, summary: dict):
    """Write the ranked list as JSON and CSV."""
    output = {
        "generated_at": datetime.now().isoformat(),
        "date": datetime.now().strftime("%Y-%m-%d"),
        "summary": summary,
        "priorities": rows,
    }
    path = output_dir / "latest_priorities.json"
    path.write_text(json.dumps(output, indent=2), encoding="utf-8")
    logger.info(f"Priorities written to {path}")

    csv_path = output_dir / "latest_priorities.csv"
    pd.DataFrame(rows).to_csv(csv_path, index=False)
    logger.info(f"Priorities CSV written to {csv_path}")


def _write_consistency(output_dir: Path, record):
    """Write the consistency record to latest_consistency.json."""
    output = {
        "score": record.score,
        "streak": record.streak,
        "last_7_days": record.last_7_days,
        "rating": record.rating,
        "message": consistency.consistency_message(record.score, record.streak),
        "recommendations": consistency.consistency_recommendations(
            record.score, record.streak
        ),
    }
    path = output_dir / "latest_consistency.json"
    path.write_text(json.dumps(output, indent=2), encoding="utf-8")
    logger.info(f"Consistency written to {path}")


def main():
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    run_daily(config)


if __name__ == "__main__":
    main()
