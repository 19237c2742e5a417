"""Data models for the game review analysis core."""

from dataclasses import dataclass, field
from datetime import date as Date
from typing import Literal

Outcome = Literal["Win", "Loss", "Draw", "Unknown"]
UserColor = Literal["white", "black"]
MomentType = Literal["blunder", "mistake", "inaccuracy", "good", "excellent"]


@dataclass
class Move:
    """One SAN token from the move text. Only `move` is filled by the parser."""

    move: str
    evaluation: float | None = None
    position: str | None = None
    comment: str | None = None


@dataclass(frozen=True)
class ParsedGame:
    """Headers plus the ordered move list of a single PGN game."""

    event: str | None = None
    site: str | None = None
    date: str | None = None
    white: str | None = None
    black: str | None = None
    result: str | None = None
    time_control: str | None = None
    eco: str | None = None
    opening: str | None = None
    fen: str | None = None
    moves: tuple[Move, ...] = ()
    raw_pgn: str = ""


@dataclass
class BasicInfo:
    white: str = "Unknown"
    black: str = "Unknown"
    result: str = "*"
    date: Date | None = None
    opening: str | None = None
    time_control: str | None = None


@dataclass
class BestMove:
    move: str
    evaluation: float


@dataclass
class Tactic:
    """A tactic exposed by one candidate move. `move` is the UCI string."""

    tactic: str
    move: str
    san: str
    explanation: str


@dataclass
class KeyMoment:
    move_number: int
    position: str
    type: MomentType
    description: str


@dataclass
class GameAnalysisResult:
    outcome: Outcome = "Unknown"
    user_color: UserColor = "white"
    accuracy: float = 0.0
    blunders: int = 0
    mistakes: int = 0
    inaccuracies: int = 0
    key_moments: list[KeyMoment] = field(default_factory=list)


@dataclass
class MissedTactic:
    move_number: int
    position: str
    tactic: str
    explanation: str


@dataclass
class ExecutedTactic:
    move_number: int
    position: str
    tactic: str


@dataclass
class TacticsAnalysisResult:
    missed_tactics: list[MissedTactic] = field(default_factory=list)
    executed_tactics: list[ExecutedTactic] = field(default_factory=list)


@dataclass
class CommonLine:
    name: str
    moves: str


@dataclass
class OpeningsAnalysisResult:
    eco: str = ""
    name: str = "Unknown Opening"
    accuracy: float = 0.0
    common_lines: list[CommonLine] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


@dataclass
class FundamentalsAnalysisResult:
    piece_development: float = 0
    center_control: float = 0
    king_safety: float = 0
    pawn_structure: float = 0
    recommendations: list[str] = field(default_factory=list)


@dataclass
class AnalysisBundle:
    """Combined result of the four pipelines for one game."""

    game: GameAnalysisResult
    tactics: TacticsAnalysisResult
    openings: OpeningsAnalysisResult
    fundamentals: FundamentalsAnalysisResult


def bundle_to_dict(bundle: AnalysisBundle) -> dict:
    """Render a bundle with the camelCase keys callers store and serve."""
    game = bundle.game
    tactics = bundle.tactics
    openings = bundle.openings
    fundamentals = bundle.fundamentals
    return {
        "game": {
            "outcome": game.outcome,
            "userColor": game.user_color,
            "accuracy": game.accuracy,
            "blunders": game.blunders,
            "mistakes": game.mistakes,
            "inaccuracies": game.inaccuracies,
            "keyMoments": [
                {
                    "moveNumber": m.move_number,
                    "position": m.position,
                    "type": m.type,
                    "description": m.description,
                }
                for m in game.key_moments
            ],
        },
        "tactics": {
            "missedTactics": [
                {
                    "moveNumber": t.move_number,
                    "position": t.position,
                    "tactic": t.tactic,
                    "explanation": t.explanation,
                }
                for t in tactics.missed_tactics
            ],
            "executedTactics": [
                {"moveNumber": t.move_number, "position": t.position, "tactic": t.tactic}
                for t in tactics.executed_tactics
            ],
        },
        "openings": {
            "eco": openings.eco,
            "name": openings.name,
            "accuracy": openings.accuracy,
            "commonLines": [{"name": line.name, "moves": line.moves} for line in openings.common_lines],
            "recommendations": list(openings.recommendations),
        },
        "fundamentals": {
            "pieceDevelopment": fundamentals.piece_development,
            "centerControl": fundamentals.center_control,
            "kingSafety": fundamentals.king_safety,
            "pawnStructure": fundamentals.pawn_structure,
            "recommendations": list(fundamentals.recommendations),
        },
    }
