from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd
from pydantic import ValidationError

from .data_models import Profile
from .rules import GOAL_VOCABULARY

logger = logging.getLogger(__name__)


# Headers are compared after `_header_key`, so case, spacing, `_` and `-` don't matter.
FIELD_ALIASES: Dict[str, List[str]] = {
    "id": ["id", "profile id", "attendee id", "user id"],
    "name": ["name", "full name"],
    "title": ["title", "job title", "role"],
    "company": ["company", "organization"],
    "industry": ["industry", "sector"],
    "interests": ["interests", "topics"],
    "goals": ["goals", "What are your goals for the event?"],
    "planned_sessions": ["planned sessions", "sessions"],
    "current_event": ["current event", "event"],
}

LIST_FIELDS = ("interests", "goals", "planned_sessions")
_LIST_SPLIT = re.compile(r"[;,|]")
_HEADER_NOISE = re.compile(r"[\s_\-]+")
_WHITESPACE = re.compile(r"\s+")


def _header_key(header: Any) -> str:
    return _HEADER_NOISE.sub("", str(header)).lower()


def column_map(columns: Iterable[Any]) -> Dict[str, Any]:
    """Map profile field names to the first export column matching one of their aliases."""
    by_key: Dict[str, Any] = {}
    for col in columns:
        by_key.setdefault(_header_key(col), col)
    mapping: Dict[str, Any] = {}
    for field, aliases in FIELD_ALIASES.items():
        col = next((by_key[k] for k in map(_header_key, aliases) if k in by_key), None)
        if col is not None:
            mapping[field] = col
    return mapping


def _clean_cell(value: Any) -> Optional[str]:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return None
    text = _WHITESPACE.sub(" ", str(value)).strip()
    return text or None


def split_list_field(value: Any) -> List[str]:
    """Split a delimited cell ("AI; Web3, Gaming") into trimmed items."""
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return []
    if isinstance(value, (list, tuple, set)):
        return [str(v).strip() for v in value if str(v).strip()]
    return [part.strip() for part in _LIST_SPLIT.split(str(value)) if part.strip()]


def profiles_from_records(records: Iterable[Dict[str, Any]]) -> List[Profile]:
    """Validate raw dict records into Profiles, skipping rows without a usable id."""
    profiles: List[Profile] = []
    for i, record in enumerate(records):
        try:
            profile = Profile.model_validate(record)
        except ValidationError as e:
            logger.warning("Skipping profile record %d: %s", i, e.errors()[0].get("msg", "invalid"))
            continue
        if not profile.id.strip():
            logger.warning("Skipping profile record %d: empty id", i)
            continue
        unknown = set(profile.goals) - GOAL_VOCABULARY
        if unknown:
            logger.debug("Profile %s has unrecognized goals %s", profile.id, sorted(unknown))
        profiles.append(profile)
    return profiles


def profiles_from_df(df: pd.DataFrame) -> List[Profile]:
    """Build profiles from an export table, one row per attendee.

    Cells are whitespace-collapsed and blank cells are dropped so the Profile
    defaults apply; list columns are split on `;`, `,` or `|`.
    """
    columns = column_map(df.columns)
    if "id" not in columns:
        raise ValueError(f"No id column found; expected one of {FIELD_ALIASES['id']}")

    records = []
    for row in df.to_dict(orient="records"):
        record: Dict[str, Any] = {}
        for field, col in columns.items():
            value = _clean_cell(row.get(col))
            if field in LIST_FIELDS:
                record[field] = split_list_field(value)
            elif value is not None:
                record[field] = value
        records.append(record)
    return profiles_from_records(records)


def load_profiles_json(path: Path) -> List[Profile]:
    with open(path, "r", encoding="utf-8") as f:
        payload = json.load(f)
    if isinstance(payload, dict):
        payload = payload.get("profiles")
    if not isinstance(payload, list):
        raise ValueError(f"Expected a list of profiles (or {{'profiles': [...]}}) in {path}")
    return profiles_from_records(payload)


def load_profiles(path: Path) -> List[Profile]:
    """Load attendee profiles from a `.json` or `.csv` export.

    Args:
        path: Path to the export file.

    Returns:
        List of validated profiles in file order.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the format is unsupported or the CSV has no id column.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Profiles file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        profiles = load_profiles_json(path)
    elif suffix == ".csv":
        profiles = profiles_from_df(pd.read_csv(path, dtype=str))
    else:
        raise ValueError(f"Unsupported profiles format: {path.suffix or '(none)'}")

    logger.info("Loaded %d profiles from %s", len(profiles), path)
    return profiles


def index_profiles(profiles: Iterable[Profile]) -> Dict[str, Profile]:
    """Index profiles by id; later duplicates win."""
    return {p.id: p for p in profiles}
