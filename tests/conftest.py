"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple modules.
"""

from typing import Callable

import pytest

from fen4.chess.fen import EMPTY_FEN4, STARTING_FEN4

# Records as chess.com writes them:
# a line break after the metadata and after every rank
CHESS_COM_STARTING_FEN4 = """R-0,0,0,0-1,1,1,1-1,1,1,1-0,0,0,0-0-
3,yR,yN,yB,yK,yQ,yB,yN,yR,3/
3,yP,yP,yP,yP,yP,yP,yP,yP,3/
14/
bR,bP,10,gP,gR/
bN,bP,10,gP,gN/
bB,bP,10,gP,gB/
bK,bP,10,gP,gQ/
bQ,bP,10,gP,gK/
bB,bP,10,gP,gB/
bN,bP,10,gP,gN/
bR,bP,10,gP,gR/
14/
3,rP,rP,rP,rP,rP,rP,rP,rP,3/
3,rR,rN,rB,rQ,rK,rB,rN,rR,3"""

# every fairy piece, dead pieces, a wall and extra options
CHESS_COM_FAIRY_FEN4 = (
    "R-0,0,0,0-0,0,0,0-0,0,0,0-0,0,0,0-0-"
    "{'lives':(50,50,50,50),'enPassant':('i3:i4','c6:d6','f12:f11','l9:k9')}-\n"
    """3,yA,yP,yN,yB,yR,yD,yQ,yK,3/
3,yE,yH,1,yC,yV,yG,yF,yW,3/
3,yJ,yL,1,yβ,yα,yY,yS,yI,3/
bK,bW,bI,2,yP,yT,yZ,yO,2,gJ,gE,gA/
bQ,bF,bS,3,yδ,yγ,yM,2,gL,gH,gP/
bD,bG,bY,bO,bM,dK,dQ,dD,dR,1,gP,2,gN/
bR,bV,bα,bZ,bγ,dB,dN,dP,X,gδ,gT,gβ,gC,gB/
bB,bC,bβ,bT,bδ,dF,dL,dJ,dT,gγ,gZ,gα,gV,gR/
bN,2,bP,1,dδ,dγ,dα,dZ,gM,gO,gY,gG,gD/
bP,bH,bL,2,rM,rγ,rδ,3,gS,gF,gQ/
bA,bE,bJ,2,rO,rZ,rT,rP,2,gI,gW,gK/
3,rI,rS,rY,rα,rβ,1,rL,rJ,3/
3,rW,rF,rG,rV,rC,1,rH,rE,3/
3,rK,rQ,rD,rR,rB,rN,rP,rA,3"""
)

# chess960 arrangement number 1: BBQNNRKR
CHESS_COM_CHESS960_1_FEN4 = """R-0,0,0,0-1,1,1,1-1,1,1,1-0,0,0,0-0-
3,yR,yK,yR,yN,yN,yQ,yB,yB,3/
3,yP,yP,yP,yP,yP,yP,yP,yP,3/
14/
bR,bP,10,gP,gB/
bK,bP,10,gP,gB/
bR,bP,10,gP,gQ/
bN,bP,10,gP,gN/
bN,bP,10,gP,gN/
bQ,bP,10,gP,gR/
bB,bP,10,gP,gK/
bB,bP,10,gP,gR/
14/
3,rP,rP,rP,rP,rP,rP,rP,rP,3/
3,rB,rB,rQ,rN,rN,rR,rK,rR,3"""


RankReplacer = Callable[[str, int, str], str]


@pytest.fixture
def replace_rank() -> RankReplacer:
    """
    Call the inner function to swap out a single rank of a (single line) record.
    rank_index 0 is the first rank written.
    """

    def _replace_rank(record: str, rank_index: int, rank_fen: str) -> str:
        metadata, _, board = record.rpartition("-")
        ranks = board.split("/")
        ranks[rank_index] = rank_fen
        return f"{metadata}-{'/'.join(ranks)}"

    return _replace_rank


@pytest.fixture
def empty_record() -> str:
    return EMPTY_FEN4


@pytest.fixture
def starting_record() -> str:
    return STARTING_FEN4


@pytest.fixture
def chess_com_starting_record() -> str:
    return CHESS_COM_STARTING_FEN4


@pytest.fixture
def chess_com_chess960_record() -> str:
    return CHESS_COM_CHESS960_1_FEN4


@pytest.fixture
def fairy_record() -> str:
    return CHESS_COM_FAIRY_FEN4
