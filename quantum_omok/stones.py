# quantum_omok/stones.py

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict


class Color(IntEnum):
    """1: 흑, 2: 백"""
    BLACK = 1
    WHITE = 2

    @property
    def other(self) -> "Color":
        return Color.WHITE if self is Color.BLACK else Color.BLACK

    @property
    def label(self) -> str:
        return "흑" if self is Color.BLACK else "백"


@dataclass(frozen=True)
class StoneKind:
    """
    확률 돌 한 종류
    - black_probability_percent: 관측 시 흑으로 확정될 확률(%)
    - placed_by: 이 돌을 두는 플레이어 (확정 색과는 무관, 기록용)
    """
    name: str
    black_probability_percent: int
    placed_by: Color
    css_class: str

    def __post_init__(self):
        if not 0 <= self.black_probability_percent <= 100:
            raise ValueError(f"확률은 0~100 사이여야 합니다: {self.black_probability_percent}")


BLACK_90 = StoneKind("BLACK_90", 90, Color.BLACK, "p90")  # 선수
BLACK_70 = StoneKind("BLACK_70", 70, Color.BLACK, "p70")  # 선수
WHITE_10 = StoneKind("WHITE_10", 10, Color.WHITE, "p10")  # 후수
WHITE_30 = StoneKind("WHITE_30", 30, Color.WHITE, "p30")  # 후수

STONE_KINDS: Dict[str, StoneKind] = {k.name: k for k in (BLACK_90, BLACK_70, WHITE_10, WHITE_30)}


def stone_kind(name: str) -> StoneKind:
    return STONE_KINDS[name]
