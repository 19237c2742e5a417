"""
Mock Engine

Material-count position evaluator standing in for a real UCI engine.
Evaluation is White-positive in whole pawn units. get_best_move negates
that score one ply ahead and keeps the maximum; no side-to-move
correction is applied, so its scores read from Black's point of view.
"""

import sys

import chess

from .models import BestMove

PIECE_VALUES = {
    chess.PAWN: 1,
    chess.KNIGHT: 3,
    chess.BISHOP: 3,
    chess.ROOK: 5,
    chess.QUEEN: 9,
}


def material_balance(board: chess.Board) -> float:
    """Material from White's perspective. Kings are not counted."""
    score = 0
    for piece in board.piece_map().values():
        value = PIECE_VALUES.get(piece.piece_type, 0)
        score += value if piece.color == chess.WHITE else -value
    return score


class MockEngine:
    """Per-analysis evaluator. Holds its own board; never shared between requests."""

    def __init__(self, fen: str | None = None):
        self.board = chess.Board()
        if fen:
            self.set_position(fen)

    def set_position(self, fen: str) -> None:
        try:
            self.board = chess.Board(fen)
        except ValueError as e:
            print(f"Error loading FEN position {fen!r}: {e}", file=sys.stderr)
            self.board = chess.Board()

    def evaluate(self) -> float:
        return material_balance(self.board)

    def get_best_move(self) -> BestMove | None:
        """
        Best move by one-ply negation of evaluate(). Ties keep the first move in
        legal-move order. None when the side to move has no legal moves.
        """
        best: BestMove | None = None
        for move in list(self.board.legal_moves):
            san = self.board.san(move)
            self.board.push(move)
            try:
                evaluation = -self.evaluate()
            finally:
                self.board.pop()
            if best is None or evaluation > best.evaluation:
                best = BestMove(move=san, evaluation=evaluation)
        return best
