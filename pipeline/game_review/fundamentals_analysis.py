"""
Fundamentals Analysis Pipeline

Scores piece development, center control, king safety and pawn structure
over the user's first twenty moves. Each heuristic is summed across the
user's positions and the totals are clamped to 0-100.
"""

import chess

from .models import FundamentalsAnalysisResult, ParsedGame
from .rules import is_user_turn, new_board, play_move, side_of

FUNDAMENTALS_PLY_LIMIT = 40
WEAK_SCORE = 60

CENTER_SQUARES = (chess.D4, chess.D5, chess.E4, chess.E5)
CASTLED_FILES = (1, 6)  # b and g files

ADVICE = {
    "development": [
        "Focus on developing your minor pieces (knights and bishops) early in the game",
        "Avoid moving the same piece multiple times in the opening",
    ],
    "center": [
        "Control the center with pawns or pieces",
        "Consider pawn moves like e4/d4 or e5/d5 to establish center presence",
    ],
    "king_safety": [
        "Castle early to protect your king",
        "Avoid advancing pawns in front of your castled king without good reason",
    ],
    "pawn_structure": [
        "Avoid creating doubled pawns unless there is compensation",
        "Try to maintain a connected pawn chain",
    ],
}


def home_rank(color: chess.Color) -> int:
    return 0 if color == chess.WHITE else 7


def piece_development_score(board: chess.Board, color: chess.Color) -> int:
    """+10 for every knight or bishop off its home rank."""
    minors = board.pieces(chess.KNIGHT, color) | board.pieces(chess.BISHOP, color)
    return sum(10 for sq in minors if chess.square_rank(sq) != home_rank(color))


def center_control_score(board: chess.Board, color: chess.Color) -> int:
    return sum(15 for sq in CENTER_SQUARES if board.color_at(sq) == color)


def king_safety_score(board: chess.Board, color: chess.Color) -> int:
    score = 50
    king = board.king(color)
    if king is not None and chess.square_rank(king) == home_rank(color) \
            and chess.square_file(king) in CASTLED_FILES:
        score += 30
    return score


def pawn_structure_score(board: chess.Board, color: chess.Color) -> int:
    """60 minus 5 per doubled pawn and 5 per isolated file, floored at 0."""
    counts = [0] * 8
    for sq in board.pieces(chess.PAWN, color):
        counts[chess.square_file(sq)] += 1

    doubled = sum(n - 1 for n in counts if n > 1)
    isolated = 0
    for f, n in enumerate(counts):
        neighbours = (counts[f - 1] if f > 0 else 0) + (counts[f + 1] if f < 7 else 0)
        if n and not neighbours:
            isolated += 1
    return max(0, 60 - doubled * 5 - isolated * 5)


def clamp(score: float) -> float:
    return min(100, max(0, score))


def fundamentals_recommendations(
    development: float, center: float, king_safety: float, pawn_structure: float
) -> list[str]:
    recommendations = []
    for key, score in (
        ("development", development),
        ("center", center),
        ("king_safety", king_safety),
        ("pawn_structure", pawn_structure),
    ):
        if score < WEAK_SCORE:
            recommendations.extend(ADVICE[key])
    return recommendations


def run_fundamentals_analysis(parsed_game: ParsedGame, user_color: str) -> FundamentalsAnalysisResult:
    board = new_board(parsed_game)
    color = side_of(user_color)

    development = center = king_safety = pawn_structure = 0
    for i, move_info in enumerate(parsed_game.moves):
        user_move = is_user_turn(board, user_color)
        if play_move(board, move_info.move) is None:
            continue
        if i < FUNDAMENTALS_PLY_LIMIT and user_move:
            development += piece_development_score(board, color)
            center += center_control_score(board, color)
            king_safety += king_safety_score(board, color)
            pawn_structure += pawn_structure_score(board, color)

    development, center = clamp(development), clamp(center)
    king_safety, pawn_structure = clamp(king_safety), clamp(pawn_structure)
    return FundamentalsAnalysisResult(
        piece_development=development,
        center_control=center,
        king_safety=king_safety,
        pawn_structure=pawn_structure,
        recommendations=fundamentals_recommendations(development, center, king_safety, pawn_structure),
    )
