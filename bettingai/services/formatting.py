# bettingai/services/formatting.py
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from ..domain.models import Match, MatchViewModel

TIME_FORMAT = "%H:%M"
DATE_FORMAT = "%d %b %Y"
NO_SCORE = "-"


def relative_day_label(day: date, today: date) -> str:
    """'Today' / 'Tomorrow' against a fixed reference day, else the date itself."""
    if day == today:
        return "Today"
    if day == today + timedelta(days=1):
        return "Tomorrow"
    return day.strftime(DATE_FORMAT)


def _score(value: Optional[int]) -> str:
    return NO_SCORE if value is None else str(value)


def to_view_model(match: Match, today: date, tz: tzinfo) -> MatchViewModel:
    local = match.kickoff_time.astimezone(tz)
    return MatchViewModel(
        id=match.id,
        home_team=match.home_team.name,
        away_team=match.away_team.name,
        home_team_id=match.home_team.id,
        away_team_id=match.away_team.id,
        home_team_logo=match.home_team.crest,
        away_team_logo=match.away_team.crest,
        time=f"{relative_day_label(local.date(), today)}, {local.strftime(TIME_FORMAT)}",
        kickoff_time=match.kickoff_time,
        status=match.status,
        league=match.competition.name,
        league_id=match.competition.id,
        home_score=_score(match.score.home),
        away_score=_score(match.score.away),
        odds=match.odds,
    )


def local_today(tz: tzinfo, now: Optional[datetime] = None) -> date:
    return (now or datetime.now(tz)).astimezone(tz).date()


def display_tz(name: str) -> tzinfo:
    return timezone.utc if name.upper() == "UTC" else ZoneInfo(name)
