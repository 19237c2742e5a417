"""
FastAPI surface for the game review analysis core

Endpoints:
  POST /analyze  - Full analysis bundle for {pgn, username}
  POST /parse    - Headers and move list of a PGN
  GET  /health
"""

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from ..analyzer import analyze_pgn
from ..models import bundle_to_dict
from ..pgn_parser import extract_basic_info, parse_pgn

app = FastAPI(title="Game Review Analysis API", version="1.0.0")


class AnalyzeRequest(BaseModel):
    pgn: str
    username: str


class ParseRequest(BaseModel):
    pgn: str


@app.post("/analyze")
async def analyze_endpoint(body: AnalyzeRequest):
    """Analyze one game for one player."""
    if not body.pgn.strip():
        raise HTTPException(status_code=400, detail="Empty PGN")
    bundle = await analyze_pgn(body.pgn, body.username)
    return bundle_to_dict(bundle)


@app.post("/parse")
def parse_endpoint(body: ParseRequest):
    """Basic game info plus the parsed move list."""
    info = extract_basic_info(body.pgn)
    game = parse_pgn(body.pgn)
    return {
        "white": info.white,
        "black": info.black,
        "result": info.result,
        "date": info.date.isoformat() if info.date else None,
        "opening": info.opening,
        "eco": game.eco,
        "timeControl": info.time_control,
        "fen": game.fen,
        "moves": [m.move for m in game.moves],
    }


@app.get("/health")
def health():
    return {"status": "ok"}
