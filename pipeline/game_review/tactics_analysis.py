"""
Tactics Analysis Pipeline

Before each user move, probes the position for a fork or a pin/skewer and
records whether the user played the move that exposed it.

Both probes are coarse: the fork probe counts every enemy piece under
attack after a candidate move, the pin probe treats a capture that leaves
the opponent few legal replies as a pin or skewer.
"""

import chess

from .models import ExecutedTactic, MissedTactic, ParsedGame, Tactic, TacticsAnalysisResult
from .rules import is_user_turn, move_number, new_board, parse_move, play_move

FORK_MIN_TARGETS = 2
PIN_REPLY_THRESHOLD = 10

FORK_EXPLANATION = "There's a fork opportunity where your piece can attack multiple pieces at once."
PIN_EXPLANATION = "There's an opportunity to pin or skewer one of your opponent's pieces."


def count_attacked_pieces(board: chess.Board) -> int:
    """Pieces of the side to move that the other side attacks."""
    attacker = not board.turn
    return sum(
        1
        for square, piece in board.piece_map().items()
        if piece.color == board.turn and board.is_attacked_by(attacker, square)
    )


def find_fork(board: chess.Board) -> Tactic | None:
    for move in list(board.legal_moves):
        san = board.san(move)
        board.push(move)
        try:
            attacked = count_attacked_pieces(board)
        finally:
            board.pop()
        if attacked >= FORK_MIN_TARGETS:
            return Tactic(tactic="Fork", move=move.uci(), san=san, explanation=FORK_EXPLANATION)
    return None


def find_pin(board: chess.Board) -> Tactic | None:
    for move in list(board.legal_moves):
        if not board.is_capture(move):
            continue
        san = board.san(move)
        board.push(move)
        try:
            replies = board.legal_moves.count()
        finally:
            board.pop()
        if replies < PIN_REPLY_THRESHOLD:
            return Tactic(tactic="Pin/Skewer", move=move.uci(), san=san, explanation=PIN_EXPLANATION)
    return None


def find_tactic(board: chess.Board) -> Tactic | None:
    """First tactic found in the position, forks before pins. The board is left unchanged."""
    return find_fork(board) or find_pin(board)


def run_tactics_analysis(parsed_game: ParsedGame, user_color: str) -> TacticsAnalysisResult:
    board = new_board(parsed_game)
    result = TacticsAnalysisResult()

    for i, move_info in enumerate(parsed_game.moves):
        if not is_user_turn(board, user_color):
            play_move(board, move_info.move)
            continue

        move = parse_move(board, move_info.move)
        if move is None:
            continue

        position = board.fen()
        tactic = find_tactic(board)
        board.push(move)
        if tactic is None:
            continue

        if move.uci() == tactic.move:
            result.executed_tactics.append(ExecutedTactic(
                move_number=move_number(i), position=position, tactic=tactic.tactic,
            ))
        else:
            result.missed_tactics.append(MissedTactic(
                move_number=move_number(i),
                position=position,
                tactic=tactic.tactic,
                explanation=tactic.explanation,
            ))

    return result
