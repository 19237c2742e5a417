"""
AI-backed analysis via the OpenRouter chat completions API.

One prompt per pipeline; the four requests are issued concurrently and
each JSON reply is validated against its schema before it is used.

  OPENROUTER_API_KEY=xxx game-review --pgn game.pgn --username me
"""

import asyncio
import json
import os
import sys

import httpx
from pydantic import BaseModel, ValidationError

from .models import AnalysisBundle
from .schemas import (
    FundamentalsAnalysisSchema,
    GameAnalysisSchema,
    OpeningsAnalysisSchema,
    TacticsAnalysisSchema,
)

OPENROUTER_API = os.environ.get("OPENROUTER_URL", "https://openrouter.ai/api/v1/chat/completions")
OPENROUTER_MODEL = os.environ.get("OPENROUTER_MODEL", "openai/gpt-4o-mini")


class AIAnalysisError(Exception):
    """The AI endpoint failed or returned something that is not a usable analysis."""


def get_api_key() -> str | None:
    return os.environ.get("OPENROUTER_API_KEY") or None


def analyzed_player(game_info: dict) -> str:
    return game_info["white"] if game_info["user_color"] == "white" else game_info["black"]


def game_analysis_prompt(game_info: dict) -> str:
    return f"""You are a chess analysis engine. Analyze this chess game PGN and provide a detailed game analysis.
Focus on critical moments, blunders, mistakes, and inaccuracies.

PGN: {game_info["pgn"]}

Player being analyzed: {analyzed_player(game_info)}
Playing as: {game_info["user_color"]}

Return ONLY a JSON object with the following structure:
{{
  "outcome": "Win|Loss|Draw",
  "userColor": "{game_info["user_color"]}",
  "accuracy": 75.5,
  "blunders": 2,
  "mistakes": 3,
  "inaccuracies": 5,
  "keyMoments": [
    {{
      "moveNumber": 24,
      "position": "FEN string if possible",
      "type": "blunder|mistake|inaccuracy|good|excellent",
      "description": "Description of what happened and better alternatives"
    }}
  ]
}}
accuracy is the player's overall accuracy from 0 to 100."""


def tactics_analysis_prompt(game_info: dict) -> str:
    return f"""You are a chess tactics expert. Analyze this chess game PGN and identify tactical opportunities that were missed or successfully executed by the player.

PGN: {game_info["pgn"]}

Player being analyzed: {analyzed_player(game_info)}
Playing as: {game_info["user_color"]}

Return ONLY a JSON object with the following structure:
{{
  "missedTactics": [
    {{
      "moveNumber": 18,
      "position": "FEN string if possible",
      "tactic": "Fork|Pin|Discovery|Skewer|etc.",
      "explanation": "Detailed explanation of what was missed and why it would be effective"
    }}
  ],
  "executedTactics": [
    {{
      "moveNumber": 32,
      "position": "FEN string if possible",
      "tactic": "Fork|Pin|Discovery|Skewer|etc."
    }}
  ]
}}"""


def openings_analysis_prompt(game_info: dict) -> str:
    return f"""You are a chess opening expert. Analyze this chess game PGN and provide detailed opening analysis.

PGN: {game_info["pgn"]}

Player being analyzed: {analyzed_player(game_info)}
Playing as: {game_info["user_color"]}

Known opening information:
ECO: {game_info["eco"]}
Opening name: {game_info["opening"]}

Return ONLY a JSON object with the following structure:
{{
  "eco": "C60",
  "name": "Opening name",
  "accuracy": 85,
  "commonLines": [
    {{"name": "Main line", "moves": "1. e4 e5 2. Nf3 Nc6 3. Bb5"}},
    {{"name": "Alternative line", "moves": "1. e4 e5 2. Nf3 Nc6 3. Bc4"}}
  ],
  "recommendations": [
    "Specific advice about openings for this player based on the game"
  ]
}}
accuracy is how closely the player followed opening theory, from 0 to 100."""


def fundamentals_analysis_prompt(game_info: dict) -> str:
    return f"""You are a chess fundamentals coach. Analyze this chess game PGN and evaluate how well the player applied chess fundamentals.

PGN: {game_info["pgn"]}

Player being analyzed: {analyzed_player(game_info)}
Playing as: {game_info["user_color"]}

Return ONLY a JSON object with the following structure:
{{
  "pieceDevelopment": 75,
  "centerControl": 60,
  "kingSafety": 80,
  "pawnStructure": 65,
  "recommendations": [
    "Specific advice to improve fundamentals based on this game"
  ]
}}
Every score is from 0 to 100."""


async def call_openrouter(
    prompt: str, analysis_type: str, session: httpx.AsyncClient, api_key: str
) -> dict:
    """Send one prompt and return the decoded JSON object from the reply."""
    headers = {"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"}
    payload = {
        "model": OPENROUTER_MODEL,
        "messages": [{"role": "user", "content": prompt}],
        "response_format": {"type": "json_object"},
    }
    resp = await session.post(OPENROUTER_API, json=payload, headers=headers)
    if resp.status_code != 200:
        raise AIAnalysisError(f"{analysis_type} request failed ({resp.status_code})")

    data = resp.json()
    choices = data.get("choices") if isinstance(data, dict) else None
    if not choices:
        raise AIAnalysisError(f"Unexpected {analysis_type} response structure")
    content = choices[0].get("message", {}).get("content")
    try:
        parsed = json.loads(content)
    except (TypeError, json.JSONDecodeError) as e:
        raise AIAnalysisError(f"Invalid JSON in {analysis_type} response: {e}") from e
    if not isinstance(parsed, dict):
        raise AIAnalysisError(f"{analysis_type} response is not a JSON object")
    return parsed


def validate_payload(schema: type[BaseModel], payload: dict, analysis_type: str):
    try:
        return schema.model_validate(payload).to_result()
    except ValidationError as e:
        raise AIAnalysisError(f"{analysis_type} response failed validation: {e}") from e


async def perform_ai_analysis(
    game_info: dict, api_key: str, session: httpx.AsyncClient | None = None
) -> AnalysisBundle:
    """Fan out the four pipeline prompts and assemble a validated bundle."""
    if session is None:
        async with httpx.AsyncClient(timeout=30.0) as own_session:
            return await perform_ai_analysis(game_info, api_key, own_session)

    print(f"Sending AI analysis requests to {OPENROUTER_MODEL}", file=sys.stderr)
    game, tactics, openings, fundamentals = await asyncio.gather(
        call_openrouter(game_analysis_prompt(game_info), "gameAnalysis", session, api_key),
        call_openrouter(tactics_analysis_prompt(game_info), "tacticsAnalysis", session, api_key),
        call_openrouter(openings_analysis_prompt(game_info), "openingsAnalysis", session, api_key),
        call_openrouter(fundamentals_analysis_prompt(game_info), "fundamentalsAnalysis", session, api_key),
    )
    return AnalysisBundle(
        game=validate_payload(GameAnalysisSchema, game, "gameAnalysis"),
        tactics=validate_payload(TacticsAnalysisSchema, tactics, "tacticsAnalysis"),
        openings=validate_payload(OpeningsAnalysisSchema, openings, "openingsAnalysis"),
        fundamentals=validate_payload(FundamentalsAnalysisSchema, fundamentals, "fundamentalsAnalysis"),
    )
