"""
Openings Analysis Pipeline

Reports the opening named in the PGN headers (no classification from the
moves), a coarse opening accuracy, and common lines and advice from a
small static table.
"""

from .models import CommonLine, OpeningsAnalysisResult, ParsedGame
from .rules import is_user_turn, new_board, play_move

OPENING_WINDOW = 20
# User half-moves before this index are taken as book; there is no theory lookup.
THEORY_PLY_LIMIT = 12

COMMON_LINES: dict[str, list[CommonLine]] = {
    "Sicilian": [
        CommonLine("Main line", "1. e4 c5 2. Nf3 d6 3. d4 cxd4 4. Nxd4"),
        CommonLine("Najdorf", "1. e4 c5 2. Nf3 d6 3. d4 cxd4 4. Nxd4 Nf6 5. Nc3 a6"),
    ],
    "Ruy Lopez": [
        CommonLine("Main line", "1. e4 e5 2. Nf3 Nc6 3. Bb5"),
        CommonLine("Berlin Defense", "1. e4 e5 2. Nf3 Nc6 3. Bb5 Nf6"),
    ],
    "French Defense": [
        CommonLine("Main line", "1. e4 e6 2. d4 d5"),
        CommonLine("Advance Variation", "1. e4 e6 2. d4 d5 3. e5"),
    ],
    "Queen's Gambit": [
        CommonLine("Main line", "1. d4 d5 2. c4"),
        CommonLine("Queen's Gambit Accepted", "1. d4 d5 2. c4 dxc4"),
        CommonLine("Queen's Gambit Declined", "1. d4 d5 2. c4 e6"),
    ],
}

DEFAULT_LINES = [
    CommonLine("Basic Opening Principles", "1. Control the center 2. Develop pieces 3. Castle"),
    CommonLine("Common first moves", "1. e4 or 1. d4 (as White), 1...e5 or 1...d5 (as Black)"),
]

GENERAL_ADVICE = [
    "Focus on developing your pieces in the opening",
    "Control the center with pawns or pieces",
    "Castle early to protect your king",
    "Connect your rooks by developing pieces",
]

# (name fragments, advice) in match order
OPENING_ADVICE: list[tuple[tuple[str, ...], list[str]]] = [
    (("Sicilian",), [
        "In the Sicilian, be prepared for tactical complications",
        "The Sicilian often leads to imbalanced positions, so calculate carefully",
    ]),
    (("Ruy Lopez", "Spanish"), [
        "The Ruy Lopez is a strategic opening, focus on long-term plans",
        "Be careful with the bishop on b5, it can be targeted",
    ]),
    (("French",), [
        "In the French Defense, be prepared for closed positions",
        "Focus on pawn breaks to open up the position",
    ]),
    (("Queen's Gambit",), [
        "The Queen's Gambit often leads to solid, positional play",
        "Focus on piece development and piece coordination",
    ]),
]


def get_common_lines(opening_name: str) -> list[CommonLine]:
    for known, lines in COMMON_LINES.items():
        if known in opening_name:
            return list(lines)
    return list(DEFAULT_LINES)


def opening_recommendations(opening_name: str) -> list[str]:
    advice = list(GENERAL_ADVICE)
    for fragments, extra in OPENING_ADVICE:
        if any(f in opening_name for f in fragments):
            advice.extend(extra)
            break
    return advice


def run_openings_analysis(parsed_game: ParsedGame, user_color: str) -> OpeningsAnalysisResult:
    name = parsed_game.opening or "Unknown Opening"
    board = new_board(parsed_game)

    opening_moves = parsed_game.moves[:OPENING_WINDOW]
    correct = 0
    for i, move_info in enumerate(opening_moves):
        user_move = is_user_turn(board, user_color)
        if play_move(board, move_info.move) is None:
            continue
        if user_move and i < THEORY_PLY_LIMIT:
            correct += 1

    accuracy = correct / len(opening_moves) * 100 if opening_moves else 0.0
    return OpeningsAnalysisResult(
        eco=parsed_game.eco or "",
        name=name,
        accuracy=accuracy,
        common_lines=get_common_lines(name),
        recommendations=opening_recommendations(name),
    )
