"""
Game Analysis Pipeline

Replays the game and grades each of the user's moves against the mock
engine's one-ply best move. Counts blunders, mistakes and inaccuracies,
records key moments, and derives accuracy and outcome.
"""

from .mock_engine import MockEngine, material_balance
from .models import GameAnalysisResult, KeyMoment, ParsedGame
from .rules import is_user_turn, move_number, new_board, parse_move, play_move

BLUNDER_THRESHOLD = 2.0
MISTAKE_THRESHOLD = 1.0
INACCURACY_THRESHOLD = 0.5
EXCELLENT_THRESHOLD = 0.2


def derive_outcome(result: str | None, user_color: str) -> str:
    """Outcome for the user from the PGN Result tag."""
    if result == "1-0":
        return "Win" if user_color == "white" else "Loss"
    if result == "0-1":
        return "Win" if user_color == "black" else "Loss"
    if result == "1/2-1/2":
        return "Draw"
    return "Unknown"


def classify_move(eval_diff: float) -> str:
    if eval_diff > BLUNDER_THRESHOLD:
        return "blunder"
    if eval_diff > MISTAKE_THRESHOLD:
        return "mistake"
    if eval_diff > INACCURACY_THRESHOLD:
        return "inaccuracy"
    return "excellent" if eval_diff < EXCELLENT_THRESHOLD else "good"


def run_game_analysis(parsed_game: ParsedGame, user_color: str) -> GameAnalysisResult:
    board = new_board(parsed_game)
    engine = MockEngine()
    result = GameAnalysisResult(
        outcome=derive_outcome(parsed_game.result, user_color),
        user_color=user_color,
    )

    total_moves = 0
    good_moves = 0
    for i, move_info in enumerate(parsed_game.moves):
        if not is_user_turn(board, user_color):
            play_move(board, move_info.move)
            continue

        move = parse_move(board, move_info.move)
        if move is None:
            continue

        position = board.fen()
        engine.set_position(position)
        best = engine.get_best_move()
        board.push(move)
        if best is None:
            continue

        total_moves += 1
        # Raw engine scores on both sides; neither is turned to the user's point of view
        eval_diff = abs(best.evaluation - material_balance(board))
        quality = classify_move(eval_diff)
        if quality == "blunder":
            result.blunders += 1
        elif quality == "mistake":
            result.mistakes += 1
        elif quality == "inaccuracy":
            result.inaccuracies += 1
        else:
            good_moves += 1

        if quality == "blunder":
            result.key_moments.append(KeyMoment(
                move_number=move_number(i),
                position=position,
                type="blunder",
                description=f"{best.move} would have been much better.",
            ))
        elif quality == "excellent":
            result.key_moments.append(KeyMoment(
                move_number=move_number(i),
                position=position,
                type="excellent",
                description="Perfect move!",
            ))

    result.accuracy = good_moves / total_moves * 100 if total_moves else 0.0
    return result
