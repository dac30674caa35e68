# quantum_omok/__init__.py
"""양자 오목: 관측 전까지 색이 정해지지 않는 확률 돌로 두는 11x11 오목."""

from quantum_omok.stones import Color, StoneKind, BLACK_90, BLACK_70, WHITE_10, WHITE_30
from quantum_omok.board import Board, BOARD_SIZE, EMPTY, Superposed, Resolved
from quantum_omok.game import QuantumOmokGame, GameState, Phase

__all__ = [
    "Color", "StoneKind", "BLACK_90", "BLACK_70", "WHITE_10", "WHITE_30",
    "Board", "BOARD_SIZE", "EMPTY", "Superposed", "Resolved",
    "QuantumOmokGame", "GameState", "Phase",
]
