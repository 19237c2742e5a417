"""
PGN Parser

Turns raw PGN text into a ParsedGame (headers + ordered SAN tokens).
Purely textual: no chess rules are consulted, nothing is validated, and
malformed input degrades to missing headers or an empty move list.
"""

import re
from datetime import date

from .models import BasicInfo, Move, ParsedGame

HEADER_RE = re.compile(r'\[(\w+)\s+"([^"]*)"\]')
RESULT_RE = re.compile(r"\s*(1-0|0-1|1/2-1/2|\*)\s*$")
MOVE_NUMBER_RE = re.compile(r"\d+\.+\s*")
COMMENT_RE = re.compile(r"\{[^}]*\}")
LINE_COMMENT_RE = re.compile(r";[^\n]*")
VARIATION_RE = re.compile(r"\([^()]*\)")
NAG_RE = re.compile(r"\$\d+")
ALNUM_RE = re.compile(r"[a-zA-Z0-9]")

# Lower-cased PGN tag -> ParsedGame field
HEADER_FIELDS = {
    "event": "event",
    "site": "site",
    "date": "date",
    "white": "white",
    "black": "black",
    "result": "result",
    "timecontrol": "time_control",
    "eco": "eco",
    "opening": "opening",
    "fen": "fen",
}


def remove_annotations(move_text: str) -> str:
    """Remove comments, variations (nested) and NAGs from PGN move text."""
    move_text = COMMENT_RE.sub(" ", move_text)
    move_text = LINE_COMMENT_RE.sub(" ", move_text)
    while True:
        stripped = VARIATION_RE.sub(" ", move_text)
        if stripped == move_text:
            break
        move_text = stripped
    return NAG_RE.sub(" ", move_text)


def parse_moves(move_text: str, strip: bool = True) -> list[Move]:
    """
    Parse PGN move text (e.g. "1. e4 e5 2. Nf3 Nc6 *") into Move records.
    With strip=False, comment and variation tokens leak through unchanged.
    """
    if strip:
        move_text = remove_annotations(move_text)
    move_text = RESULT_RE.sub("", move_text)
    move_text = MOVE_NUMBER_RE.sub(" ", move_text)
    return [Move(move=token) for token in move_text.split() if ALNUM_RE.search(token)]


def parse_pgn(pgn: str, strip_annotations: bool = True) -> ParsedGame:
    """Parse a single PGN game. Never raises for string input."""
    clean = (pgn or "").replace("\r\n", "\n").replace("\r", "\n").strip()

    headers: dict[str, str] = {}
    header_end = 0
    for match in HEADER_RE.finditer(clean):
        key, value = match.groups()
        name = HEADER_FIELDS.get(key.lower())
        if name:
            headers[name] = value
        header_end = match.end()

    # Move text follows the last tag pair; "]" inside {[%clk ...]} comments does not count
    move_text = clean[header_end:].strip()
    moves = parse_moves(move_text, strip=strip_annotations)

    return ParsedGame(moves=tuple(moves), raw_pgn=clean, **headers)


def parse_pgn_date(value: str | None) -> date | None:
    """Parse a PGN "YYYY.MM.DD" date. Unknown parts ("????") give None."""
    if not value:
        return None
    parts = value.split(".")
    if len(parts) != 3:
        return None
    try:
        year, month, day = (int(p) for p in parts)
        return date(year, month, day)
    except ValueError:
        return None


def extract_basic_info(pgn: str) -> BasicInfo:
    """Players, result, date, opening and time control with display defaults."""
    game = parse_pgn(pgn)
    return BasicInfo(
        white=game.white or "Unknown",
        black=game.black or "Unknown",
        result=game.result or "*",
        date=parse_pgn_date(game.date),
        opening=game.opening,
        time_control=game.time_control,
    )
