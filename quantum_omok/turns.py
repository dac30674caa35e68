# quantum_omok/turns.py
"""
수순별 돌 종류 배정
- pair_index = move_count // 2 (흑백 합산 수 기준, 플레이어별 수가 아님)
- 흑: 짝수 pair → BLACK_90, 홀수 → BLACK_70
- 백: 짝수 pair → WHITE_10, 홀수 → WHITE_30
"""

from __future__ import annotations
from typing import Tuple

from quantum_omok.stones import BLACK_70, BLACK_90, WHITE_10, WHITE_30, Color, StoneKind


def stone_kind_for(move_count: int, turn: Color) -> StoneKind:
    if move_count < 0:
        raise ValueError(f"move_count는 0 이상이어야 합니다: {move_count}")
    pair_index = move_count // 2
    if turn == Color.BLACK:
        return BLACK_90 if pair_index % 2 == 0 else BLACK_70
    return WHITE_10 if pair_index % 2 == 0 else WHITE_30


def next_turn(turn: Color) -> Color:
    return turn.other


def advance(move_count: int, turn: Color) -> Tuple[StoneKind, Color, int]:
    """한 수 진행: (둘 돌 종류, 다음 차례, 다음 move_count)"""
    return stone_kind_for(move_count, turn), next_turn(turn), move_count + 1
