"""
Game Review Analysis

Analyzes one PGN game for one player. Uses the AI endpoint when an
OpenRouter key is configured, racing it against a timeout, and falls back
to the heuristic pipelines (game, tactics, openings, fundamentals).
Always returns a fully populated bundle.

Usage:
  python -m game_review.analyzer --pgn game.pgn --username magnus
  OPENROUTER_API_KEY=xxx game-review --pgn game.pgn --username magnus --timeout 10
"""

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path

import httpx

from .ai_analysis import get_api_key, perform_ai_analysis
from .fundamentals_analysis import run_fundamentals_analysis
from .game_analysis import run_game_analysis
from .models import (
    AnalysisBundle,
    FundamentalsAnalysisResult,
    GameAnalysisResult,
    OpeningsAnalysisResult,
    ParsedGame,
    TacticsAnalysisResult,
    bundle_to_dict,
)
from .openings_analysis import run_openings_analysis
from .pgn_parser import parse_pgn
from .tactics_analysis import run_tactics_analysis

DEFAULT_TIMEOUT = 30.0


def get_timeout() -> float:
    """ANALYSIS_TIMEOUT in seconds; unset or unparsable values give the default."""
    raw = os.environ.get("ANALYSIS_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        print(f"Invalid ANALYSIS_TIMEOUT {raw!r}, using {DEFAULT_TIMEOUT}s", file=sys.stderr)
        return DEFAULT_TIMEOUT
    if not timeout > 0:
        print(f"ANALYSIS_TIMEOUT must be positive, using {DEFAULT_TIMEOUT}s", file=sys.stderr)
        return DEFAULT_TIMEOUT
    return timeout


AI_TIMEOUT = get_timeout()


def determine_user_color(parsed_game: ParsedGame, username: str) -> str:
    """Case-insensitive match on the White/Black tags. Defaults to white."""
    name = (username or "").lower()
    if parsed_game.white and parsed_game.white.lower() == name:
        return "white"
    if parsed_game.black and parsed_game.black.lower() == name:
        return "black"
    return "white"


def game_info_for(pgn: str, parsed_game: ParsedGame, user_color: str) -> dict:
    return {
        "pgn": pgn,
        "white": parsed_game.white or "Unknown",
        "black": parsed_game.black or "Unknown",
        "result": parsed_game.result or "*",
        "event": parsed_game.event or "Unknown event",
        "date": parsed_game.date or "Unknown date",
        "opening": parsed_game.opening or "Unknown opening",
        "eco": parsed_game.eco or "",
        "move_count": len(parsed_game.moves),
        "user_color": user_color,
    }


def fallback_analysis(parsed_game: ParsedGame, user_color: str) -> AnalysisBundle:
    """
    Heuristic pipelines, run one after another. Each replays on its own board.
    CPU-bound: async callers run it in a worker thread.
    """
    return AnalysisBundle(
        game=run_game_analysis(parsed_game, user_color),
        tactics=run_tactics_analysis(parsed_game, user_color),
        openings=run_openings_analysis(parsed_game, user_color),
        fundamentals=run_fundamentals_analysis(parsed_game, user_color),
    )


def empty_bundle() -> AnalysisBundle:
    """Zeroed bundle with generic advice, returned when analysis itself fails."""
    return AnalysisBundle(
        game=GameAnalysisResult(),
        tactics=TacticsAnalysisResult(),
        openings=OpeningsAnalysisResult(
            recommendations=[
                "Focus on basic opening principles",
                "Develop your pieces toward the center",
                "Castle early",
                "Connect your rooks",
            ],
        ),
        fundamentals=FundamentalsAnalysisResult(
            recommendations=[
                "Review basic chess principles",
                "Practice piece coordination",
                "Work on tactical awareness",
            ],
        ),
    )


async def analyze_pgn(
    pgn: str,
    username: str,
    api_key: str | None = None,
    timeout: float = AI_TIMEOUT,
    session: httpx.AsyncClient | None = None,
) -> AnalysisBundle:
    """
    Analyze a PGN for `username`. Never raises.

    The AI path wins only if all four replies validate before `timeout`;
    otherwise its outstanding requests are cancelled and the heuristic
    bundle is returned.
    """
    try:
        parsed_game = parse_pgn(pgn)
        user_color = determine_user_color(parsed_game, username)
        print(f"Analyzing {len(parsed_game.moves)} moves for {username} as {user_color}", file=sys.stderr)

        if api_key is None:
            api_key = get_api_key()
        if not api_key:
            return await asyncio.to_thread(fallback_analysis, parsed_game, user_color)

        game_info = game_info_for(pgn, parsed_game, user_color)
        try:
            return await asyncio.wait_for(
                perform_ai_analysis(game_info, api_key, session), timeout=timeout
            )
        except asyncio.TimeoutError:
            print(f"AI analysis timed out after {timeout}s, using heuristic analysis", file=sys.stderr)
        except Exception as e:
            print(f"AI analysis failed: {e}", file=sys.stderr)
        return await asyncio.to_thread(fallback_analysis, parsed_game, user_color)
    except Exception as e:
        print(f"Error analyzing game for {username}: {e}", file=sys.stderr)
        return empty_bundle()


def analyze(pgn: str, username: str, **kwargs) -> AnalysisBundle:
    """Synchronous wrapper around analyze_pgn for callers without an event loop."""
    return asyncio.run(analyze_pgn(pgn, username, **kwargs))


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--pgn", required=True, help="PGN file path, or - for stdin")
    parser.add_argument("--username", required=True, help="Account name used to find the player's colour")
    parser.add_argument("--no-ai", action="store_true", help="Skip the AI endpoint even if a key is set")
    parser.add_argument("--timeout", type=float, default=AI_TIMEOUT)
    args = parser.parse_args()

    if args.pgn == "-":
        pgn = sys.stdin.read()
    else:
        pgn = Path(args.pgn).read_text(encoding="utf-8", errors="replace")

    api_key = "" if args.no_ai else None
    bundle = analyze(pgn, args.username, api_key=api_key, timeout=args.timeout)
    print(json.dumps(bundle_to_dict(bundle), indent=2))


if __name__ == "__main__":
    main()
