"""Thin helpers over python-chess shared by the analysis pipelines."""

import sys

import chess

from .models import ParsedGame

MOVE_ERRORS = (chess.InvalidMoveError, chess.IllegalMoveError, chess.AmbiguousMoveError)


def side_of(user_color: str) -> chess.Color:
    return chess.BLACK if user_color == "black" else chess.WHITE


def is_user_turn(board: chess.Board, user_color: str) -> bool:
    return board.turn == side_of(user_color)


def move_number(ply_index: int) -> int:
    """1-based full-move number of a 0-based half-move index."""
    return ply_index // 2 + 1


def new_board(parsed_game: ParsedGame) -> chess.Board:
    """Fresh board for a replay: the game's FEN setup if valid, else the start position."""
    if parsed_game.fen:
        try:
            return chess.Board(parsed_game.fen)
        except ValueError as e:
            print(f"Invalid FEN header {parsed_game.fen!r}: {e}", file=sys.stderr)
    return chess.Board()


def parse_move(board: chess.Board, san: str) -> chess.Move | None:
    """Resolve a SAN token against the board. None if it does not apply."""
    try:
        return board.parse_san(san)
    except MOVE_ERRORS as e:
        print(f"Error applying move {san}: {e}", file=sys.stderr)
        return None


def play_move(board: chess.Board, san: str) -> chess.Move | None:
    """Push a SAN token. Returns the move, or None (board untouched) if it does not apply."""
    move = parse_move(board, san)
    if move is not None:
        board.push(move)
    return move
