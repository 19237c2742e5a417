"""Pydantic schemas validating AI analysis payloads before they become results."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .models import (
    CommonLine,
    ExecutedTactic,
    FundamentalsAnalysisResult,
    GameAnalysisResult,
    KeyMoment,
    MissedTactic,
    OpeningsAnalysisResult,
    TacticsAnalysisResult,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class KeyMomentSchema(CamelModel):
    move_number: int = Field(alias="moveNumber", ge=1)
    position: str = ""
    type: Literal["blunder", "mistake", "inaccuracy", "good", "excellent"]
    description: str


class GameAnalysisSchema(CamelModel):
    outcome: Literal["Win", "Loss", "Draw", "Unknown"]
    user_color: Literal["white", "black"] = Field(alias="userColor")
    accuracy: float = Field(ge=0, le=100)
    blunders: int = Field(ge=0)
    mistakes: int = Field(ge=0)
    inaccuracies: int = Field(ge=0)
    key_moments: list[KeyMomentSchema] = Field(default_factory=list, alias="keyMoments")

    def to_result(self) -> GameAnalysisResult:
        return GameAnalysisResult(
            outcome=self.outcome,
            user_color=self.user_color,
            accuracy=self.accuracy,
            blunders=self.blunders,
            mistakes=self.mistakes,
            inaccuracies=self.inaccuracies,
            key_moments=[KeyMoment(**m.model_dump()) for m in self.key_moments],
        )


class MissedTacticSchema(CamelModel):
    move_number: int = Field(alias="moveNumber", ge=1)
    position: str = ""
    tactic: str
    explanation: str


class ExecutedTacticSchema(CamelModel):
    move_number: int = Field(alias="moveNumber", ge=1)
    position: str = ""
    tactic: str


class TacticsAnalysisSchema(CamelModel):
    missed_tactics: list[MissedTacticSchema] = Field(alias="missedTactics")
    executed_tactics: list[ExecutedTacticSchema] = Field(alias="executedTactics")

    def to_result(self) -> TacticsAnalysisResult:
        return TacticsAnalysisResult(
            missed_tactics=[MissedTactic(**t.model_dump()) for t in self.missed_tactics],
            executed_tactics=[ExecutedTactic(**t.model_dump()) for t in self.executed_tactics],
        )


class CommonLineSchema(BaseModel):
    name: str
    moves: str


class OpeningsAnalysisSchema(CamelModel):
    eco: str = ""
    name: str
    accuracy: float = Field(ge=0, le=100)
    common_lines: list[CommonLineSchema] = Field(default_factory=list, alias="commonLines")
    recommendations: list[str]

    def to_result(self) -> OpeningsAnalysisResult:
        return OpeningsAnalysisResult(
            eco=self.eco,
            name=self.name,
            accuracy=self.accuracy,
            common_lines=[CommonLine(line.name, line.moves) for line in self.common_lines],
            recommendations=list(self.recommendations),
        )


class FundamentalsAnalysisSchema(CamelModel):
    piece_development: float = Field(alias="pieceDevelopment", ge=0, le=100)
    center_control: float = Field(alias="centerControl", ge=0, le=100)
    king_safety: float = Field(alias="kingSafety", ge=0, le=100)
    pawn_structure: float = Field(alias="pawnStructure", ge=0, le=100)
    recommendations: list[str]

    def to_result(self) -> FundamentalsAnalysisResult:
        return FundamentalsAnalysisResult(
            piece_development=self.piece_development,
            center_control=self.center_control,
            king_safety=self.king_safety,
            pawn_structure=self.pawn_structure,
            recommendations=list(self.recommendations),
        )
