from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich import print
from rich.logging import RichHandler
from rich.table import Table

from . import MatchingService
from .config import EngineSettings
from .data_models import MatchOptions, Profile
from .ingest import index_profiles, load_profiles


app = typer.Typer(help="Event attendee compatibility & matching CLI")


def _setup(level: Optional[str]) -> EngineSettings:
	settings = EngineSettings()
	logging.basicConfig(
		level=(level or settings.log_level).upper(),
		format="%(message)s",
		datefmt="[%X]",
		handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
	)
	return settings


def _load(path: Path) -> Dict[str, Profile]:
	try:
		return index_profiles(load_profiles(path))
	except (FileNotFoundError, ValueError) as e:
		raise typer.BadParameter(str(e), param_hint="PROFILES")


def _lookup(profiles: Dict[str, Profile], profile_id: str) -> Profile:
	profile = profiles.get(profile_id)
	if profile is None:
		raise typer.BadParameter(f"Unknown profile id: {profile_id}")
	return profile


def _dump(payload) -> None:
	typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command()
def score(
	profiles_path: Path = typer.Argument(..., help="Profiles export (.json or .csv)"),
	a_id: str = typer.Argument(..., help="First profile id"),
	b_id: str = typer.Argument(..., help="Second profile id"),
	log_level: Optional[str] = typer.Option(None, help="Override MATCH_LOG_LEVEL"),
):
	"""Score the compatibility of two profiles."""
	service = MatchingService(_setup(log_level))
	profiles = _load(profiles_path)
	result = service.calculate_compatibility(_lookup(profiles, a_id), _lookup(profiles, b_id))
	_dump(result.model_dump(by_alias=True, mode="json"))


@app.command()
def matches(
	profiles_path: Path = typer.Argument(..., help="Profiles export (.json or .csv)"),
	subject_id: str = typer.Argument(..., help="Profile id to find matches for"),
	limit: Optional[int] = typer.Option(None, help="Maximum number of matches (default MATCH_DEFAULT_LIMIT)"),
	min_score: Optional[int] = typer.Option(None, help="Drop matches scoring below this"),
	as_json: bool = typer.Option(False, "--json/--table", help="Emit JSON instead of a table"),
	log_level: Optional[str] = typer.Option(None, help="Override MATCH_LOG_LEVEL"),
):
	"""Rank the other profiles in the file against SUBJECT_ID."""
	settings = _setup(log_level)
	service = MatchingService(settings)
	profiles = _load(profiles_path)
	subject = _lookup(profiles, subject_id)
	overrides = {"limit": limit, "min_score": min_score}
	options = MatchOptions(**{k: v for k, v in overrides.items() if v is not None})
	found = service.find_matches(subject, list(profiles.values()), options)

	if as_json:
		_dump([m.model_dump(by_alias=True, mode="json") for m in found])
		return

	table = Table("rank", "id", "name", "title", "company", "overall", "prof", "int", "intent", "ctx")
	for i, m in enumerate(found, start=1):
		p, s = m.candidate_profile, m.score
		table.add_row(
			str(i), p.id, p.name, p.title, p.company, str(s.overall),
			str(s.breakdown.professional), str(s.breakdown.interests),
			str(s.breakdown.intent), str(s.breakdown.contextual),
		)
	print(table)
	print(f"[bold]{len(found)} matches[/bold] for {subject.name or subject.id}")


@app.command()
def starters(
	profiles_path: Path = typer.Argument(..., help="Profiles export (.json or .csv)"),
	a_id: str = typer.Argument(..., help="Profile id of the person reaching out"),
	b_id: str = typer.Argument(..., help="Profile id of the person being contacted"),
	log_level: Optional[str] = typer.Option(None, help="Override MATCH_LOG_LEVEL"),
):
	"""Suggest three conversation starters from A to B, plus conversation tips."""
	service = MatchingService(_setup(log_level))
	profiles = _load(profiles_path)
	a, b = _lookup(profiles, a_id), _lookup(profiles, b_id)
	result = service.calculate_compatibility(a, b)
	suggestions: List[dict] = [s.model_dump() for s in service.generate_conversation_starters(a, b, result)]
	_dump({"score": result.overall, "starters": suggestions, "tips": service.conversation_tips(result)})


if __name__ == "__main__":
	app()
