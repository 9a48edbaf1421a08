"""
Team statistics derived from a team's match history.

Both folds only look at FINISHED matches and work out which side the team
was on by id, so the input may contain any mix of home and away games.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from ..domain.models import Match, TeamStats

FINISHED = ("FINISHED", "Final", "STATUS_FINAL", "Final/OT", "Final/SO")
FORM_LENGTH = 5


def _is_finished(match: Match) -> bool:
    return match.status.upper() in {s.upper() for s in FINISHED}


def _oriented(team_id: int, match: Match) -> Optional[Tuple[int, int]]:
    """(our score, their score) or None when the team did not play in it."""
    if match.home_team.id == team_id:
        return match.score.home or 0, match.score.away or 0
    if match.away_team.id == team_id:
        return match.score.away or 0, match.score.home or 0
    return None


def _results(team_id: int, matches: Iterable[Match]) -> List[Tuple[Match, int, int]]:
    out = []
    for m in matches:
        if not _is_finished(m):
            continue
        scores = _oriented(team_id, m)
        if scores is not None:
            out.append((m, *scores))
    return out


def _form(results: List[Tuple[Match, int, int]]) -> List[str]:
    ordered = sorted(results, key=lambda r: r[0].kickoff_time)[-FORM_LENGTH:]
    return ["W" if ours > theirs else "D" if ours == theirs else "L" for _, ours, theirs in ordered]


def football_team_stats(team_id: int, matches: Iterable[Match]) -> TeamStats:
    """
    Win 3 / draw 1 / loss 0, plus goals, clean sheets and win rate
    (percentage, one decimal; 0.0 before the first finished match).
    """
    results = _results(team_id, matches)
    stats: TeamStats = {
        "played": 0,
        "wins": 0,
        "draws": 0,
        "losses": 0,
        "goals_for": 0,
        "goals_against": 0,
        "clean_sheets": 0,
        "points": 0,
    }
    for _, ours, theirs in results:
        stats["played"] += 1
        stats["goals_for"] += ours
        stats["goals_against"] += theirs
        if ours > theirs:
            stats["wins"] += 1
            stats["points"] += 3
        elif ours == theirs:
            stats["draws"] += 1
            stats["points"] += 1
        else:
            stats["losses"] += 1
        if theirs == 0:
            stats["clean_sheets"] += 1

    stats["goal_difference"] = stats["goals_for"] - stats["goals_against"]
    stats["win_rate"] = round(stats["wins"] / stats["played"] * 100, 1) if stats["played"] else 0.0
    stats["form"] = _form(results)
    return stats


def basketball_team_stats(team_id: int, matches: Iterable[Match]) -> TeamStats:
    """Win/loss record and per-game scoring averages."""
    results = _results(team_id, matches)
    played = len(results)
    wins = sum(1 for _, ours, theirs in results if ours > theirs)
    scored = sum(ours for _, ours, _ in results)
    allowed = sum(theirs for _, _, theirs in results)
    return {
        "played": played,
        "wins": wins,
        "losses": played - wins,
        "win_percentage": round(wins / played, 3) if played else 0.0,
        "points_per_game": round(scored / played, 1) if played else 0.0,
        "points_allowed_per_game": round(allowed / played, 1) if played else 0.0,
        "form": _form(results),
    }
