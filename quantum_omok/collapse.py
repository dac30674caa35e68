# quantum_omok/collapse.py

from __future__ import annotations
import logging
import random
from typing import Optional, Protocol

from quantum_omok.board import Board, Superposed
from quantum_omok.stones import Color

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def random(self) -> float: ...


def default_random_source(seed: Optional[int] = None) -> RandomSource:
    """seed가 있으면 재현용 Random, 없으면 OS 엔트로피"""
    if seed is None:
        return random.SystemRandom()
    return random.Random(seed)


class CollapseEngine:
    """
    관측(붕괴) 엔진
    - 확률 돌마다 독립적으로 [0, 100) 난수 하나를 뽑는다
    - 난수 < 흑 확률(%) 이면 흑, 아니면 백
    """

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng if rng is not None else default_random_source()

    def draw(self) -> float:
        return self.rng.random() * 100

    def collapse(self, board: Board) -> Board:
        """입력 보드는 건드리지 않고 확정된 새 보드를 반환"""
        out = board.snapshot()
        drawn = 0
        for r, c, cell in board.iter_non_empty():
            if not isinstance(cell, Superposed):
                continue  # 이미 확정된 칸은 그대로
            value = self.draw()
            drawn += 1
            color = Color.BLACK if value < cell.kind.black_probability_percent else Color.WHITE
            out.resolve(r, c, color)
        logger.debug("[collapse] %d stones resolved", drawn)
        return out

    def revert(self, snapshot: Board) -> Board:
        # 다시 뽑지 않고 관측 전 보드를 그대로 복원
        return snapshot
