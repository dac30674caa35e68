# quantum_omok/win.py

from __future__ import annotations
from typing import List, Optional, Tuple

from quantum_omok.board import BOARD_SIZE, Board
from quantum_omok.stones import Color

WIN_LENGTH = 5

# 가로, 세로, 우하향 대각, 좌하향 대각
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (1, 1), (1, -1))


def _run_from(board: Board, row: int, col: int, dr: int, dc: int, color: Color) -> int:
    """(row, col)에서 한 방향으로 같은 색이 최대 WIN_LENGTH까지 몇 개 이어지는지"""
    count = 0
    r, c = row, col
    while count < WIN_LENGTH and board.is_color(r, c, color):
        count += 1
        r += dr
        c += dc
    return count


def winning_line(board: Board, color: Color) -> Optional[List[Tuple[int, int]]]:
    """
    확정된 보드에서 color의 5목 첫 줄 좌표를 반환 (없으면 None)
    각 칸을 시작점으로 4방향을 센다. 미확정 돌은 어느 색으로도 세지 않는다.
    """
    for r in range(BOARD_SIZE):
        for c in range(BOARD_SIZE):
            if not board.is_color(r, c, color):
                continue
            for dr, dc in DIRECTIONS:
                if _run_from(board, r, c, dr, dc, color) >= WIN_LENGTH:
                    return [(r + dr * i, c + dc * i) for i in range(WIN_LENGTH)]
    return None


def has_five_in_row(board: Board, color: Color) -> bool:
    return winning_line(board, color) is not None
