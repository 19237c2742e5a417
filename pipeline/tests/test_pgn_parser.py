"""Tests for pgn_parser.py"""

import sys
from datetime import date
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from game_review.pgn_parser import extract_basic_info, parse_moves, parse_pgn, parse_pgn_date


def san_list(game) -> list[str]:
    return [m.move for m in game.moves]


def test_parse_moves_simple_sequence():
    game = parse_pgn("1. e4 e5 2. Nf3 Nc6 3. Bb5 *")
    assert san_list(game) == ["e4", "e5", "Nf3", "Nc6", "Bb5"]


def test_parse_moves_without_space_after_number():
    assert [m.move for m in parse_moves("1.e4 e5 2.Nf3 Nc6")] == ["e4", "e5", "Nf3", "Nc6"]


def test_black_move_number_prefix_is_removed():
    assert [m.move for m in parse_moves("12... Qxd4 13. Rxd4")] == ["Qxd4", "Rxd4"]


@pytest.mark.parametrize("result", ["1-0", "0-1", "1/2-1/2", "*"])
def test_trailing_result_is_stripped(result):
    game = parse_pgn(f"1. d4 d5 2. c4 {result}")
    assert san_list(game) == ["d4", "d5", "c4"]


def test_headers_are_extracted(scholars_mate):
    game = parse_pgn(scholars_mate)
    assert game.event == "Casual Game"
    assert game.site == "lichess.org"
    assert game.date == "2024.03.15"
    assert game.white == "alice"
    assert game.black == "bob"
    assert game.result == "1-0"
    assert game.time_control == "300+0"
    assert game.eco == "C20"
    assert game.opening == "King's Pawn Game"
    assert san_list(game) == ["e4", "e5", "Bc4", "Nc6", "Qh5", "Nf6", "Qxf7#"]


def test_header_keys_are_case_insensitive():
    game = parse_pgn('[white "Alice"]\n[ECO "B20"]\n[timecontrol "60"]\n\n1. e4 c5 *')
    assert game.white == "Alice"
    assert game.eco == "B20"
    assert game.time_control == "60"


def test_unrecognized_headers_are_ignored():
    game = parse_pgn('[WhiteElo "2100"]\n[Annotator "me"]\n\n1. e4 *')
    assert game.white is None
    assert san_list(game) == ["e4"]


def test_fen_header_is_kept():
    fen = "7k/8/8/8/8/8/8/R6K w - - 0 1"
    game = parse_pgn(f'[SetUp "1"]\n[FEN "{fen}"]\n\n1. Ra8# 1-0')
    assert game.fen == fen


def test_crlf_line_endings():
    game = parse_pgn('[White "a"]\r\n[Black "b"]\r\n\r\n1. e4 e5\r\n2. Nf3 *\r\n')
    assert game.black == "b"
    assert san_list(game) == ["e4", "e5", "Nf3"]
    assert "\r" not in game.raw_pgn


@pytest.mark.parametrize("pgn", ["", "   ", "\n\n", "[Event \"x\"]", "*", "1-0", "]]]", "{unterminated"])
def test_degenerate_input_never_raises(pgn):
    game = parse_pgn(pgn)
    assert isinstance(game.moves, tuple)


def test_empty_move_text_gives_empty_move_list():
    assert parse_pgn('[White "a"]\n[Black "b"]\n').moves == ()


def test_no_headers_uses_whole_input():
    game = parse_pgn("1. c4 e5 2. g3")
    assert game.white is None
    assert san_list(game) == ["c4", "e5", "g3"]


def test_comments_variations_and_nags_are_stripped():
    pgn = "1. e4 {best by test} e5 (1... c5 2. Nf3 (2. c3)) 2. Nf3 $1 ; king's knight\nNc6 *"
    assert san_list(parse_pgn(pgn)) == ["e4", "e5", "Nf3", "Nc6"]


CLOCKED_EXPORT = """[Event "Live Chess"]
[White "alice"]
[Black "bob"]
[Result "*"]

1. e4 { [%clk 0:09:58] } 1... e5 { [%clk 0:09:57] } 2. Nf3 { [%clk 0:09:51] }
2... Nc6 { [%clk 0:09:49] } 3. Bb5 { [%clk 0:09:40] } *
"""


def test_clock_comments_do_not_end_the_header_section():
    game = parse_pgn(CLOCKED_EXPORT)
    assert game.white == "alice"
    assert game.black == "bob"
    assert san_list(game) == ["e4", "e5", "Nf3", "Nc6", "Bb5"]


def test_clock_comments_leak_without_stripping():
    moves = san_list(parse_pgn(CLOCKED_EXPORT, strip_annotations=False))
    assert moves[0] == "e4"
    assert "[%clk" in moves
    assert moves[-1] == "0:09:40]"


def test_annotations_leak_when_stripping_disabled():
    pgn = "1. e4 {best by test} e5 (1... c5) 2. Nf3 *"
    moves = san_list(parse_pgn(pgn, strip_annotations=False))
    assert moves[0] == "e4"
    assert "{best" in moves
    assert "test}" in moves
    assert "c5)" in moves
    assert moves[-1] == "Nf3"


def test_parsed_game_is_immutable():
    game = parse_pgn("1. e4 *")
    with pytest.raises(AttributeError):
        game.white = "someone"


def test_extract_basic_info_date():
    info = extract_basic_info('[Date "2024.03.15"]\n\n1. e4 *')
    assert info.date == date(2024, 3, 15)


def test_extract_basic_info_unknown_date():
    info = extract_basic_info('[Date "????.??.??"]\n\n1. e4 *')
    assert info.date is None


def test_extract_basic_info_defaults():
    info = extract_basic_info("1. e4 e5")
    assert info.white == "Unknown"
    assert info.black == "Unknown"
    assert info.result == "*"
    assert info.date is None
    assert info.opening is None


@pytest.mark.parametrize("value", ["2024.13.01", "2024.02.30", "2024.03", "2024-03-15", "", None])
def test_parse_pgn_date_rejects_bad_values(value):
    assert parse_pgn_date(value) is None
