"""
Type definitions used across layers
"""

from enum import StrEnum

# --- Color DOES NOT contain an option for empty squares. That version lives in src/chess/pieces.py
# --- NOTE Same name in both places: the imports show which version is used in what part of the code


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"


class Winner(StrEnum):
    WHITE = "white"
    BLACK = "black"
    DRAW = "draw"


class RejectionReason(StrEnum):
    NOT_YOUR_TURN = "not_your_turn"
    ILLEGAL_MOVE = "illegal_move"
