"""Load contact exports and activity logs with pandas."""

import logging
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from realcoach.engines.consistency import completions_from_counts
from realcoach.errors import ConfigurationError
from realcoach.models.records import ContactSnapshot

logger = logging.getLogger(__name__)

CONTACT_COLUMNS = [
    "id",
    "name",
    "pipeline_stage",
    "motivation_level",
    "timeframe",
    "days_since_contact",
    "preapproval_status",
    "priority_score",
    "seven_day_rule_flag",
]


def read_table(path: Path) -> pd.DataFrame:
    """Read a CSV or Excel file into a DataFrame."""
    if path.suffix.lower() in (".xlsx", ".xls"):
        return pd.read_excel(path)
    return pd.read_csv(path)


def _clean_row(row: pd.Series) -> Dict[str, Any]:
    """Map NaN cells to None, numpy scalars to Python values and integral floats to ints."""
    cleaned = {}
    for column in CONTACT_COLUMNS:
        value = row.get(column)
        if value is None or not pd.notna(value):
            cleaned[column] = None
            continue
        if hasattr(value, "item"):
            value = value.item()
        if isinstance(value, float) and value.is_integer():
            cleaned[column] = int(value)
        else:
            cleaned[column] = value
    return cleaned


def contact_rows(path: Path) -> List[Dict[str, Any]]:
    """Read a contact export into storage-shaped rows.

    Rows are left unvalidated; pass them to ContactSnapshot.from_dict or to
    build_daily_priorities, which isolates bad rows.
    """
    try:
        df = read_table(path)
    except FileNotFoundError:
        logger.error(f"Contacts file not found: {path}")
        return []

    logger.info(f"Read {len(df)} rows from {path}")
    return [_clean_row(row) for _, row in df.iterrows()]


def load_contacts(path: Path) -> List[ContactSnapshot]:
    """Load and validate contacts, skipping rows that fail validation."""
    contacts = []
    for row in contact_rows(path):
        try:
            contacts.append(ContactSnapshot.from_dict(row))
        except ConfigurationError as e:
            logger.warning(f"Skipping contact {row.get('id')}: {e}")
            continue

    logger.info(f"Loaded {len(contacts)} contacts")
    return contacts


def load_completion_history(path: Path, daily_target: int) -> List[bool]:
    """Load a per-day activity log into completion flags, oldest first.

    The file needs a ``date`` column plus either a ``completed`` column of
    booleans or a ``count`` column of contacts made that day.
    """
    try:
        df = read_table(path)
    except FileNotFoundError:
        logger.error(f"Activity file not found: {path}")
        return []

    if df.empty:
        return []
    if "date" not in df.columns:
        raise ConfigurationError(f"Activity file {path} has no 'date' column")

    df["date"] = pd.to_datetime(df["date"])
    df = df.sort_values("date")

    if "completed" in df.columns:
        history = [
            bool(value) if pd.notna(value) else False for value in df["completed"]
        ]
    elif "count" in df.columns:
        counts = [int(value) if pd.notna(value) else 0 for value in df["count"]]
        history = completions_from_counts(counts, daily_target)
    else:
        raise ConfigurationError(
            f"Activity file {path} needs a 'completed' or 'count' column"
        )

    logger.info(f"Loaded {len(history)} days of activity from {path}")
    return history
