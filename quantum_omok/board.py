# quantum_omok/board.py

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple, Union

from quantum_omok.errors import CellOccupied, OutOfBounds
from quantum_omok.stones import Color, StoneKind

# 보드 크기는 고정 (11x11 교점)
BOARD_SIZE = 11


@dataclass(frozen=True)
class Empty:
    def __repr__(self) -> str:
        return "EMPTY"


@dataclass(frozen=True)
class Superposed:
    """놓였지만 아직 관측되지 않은 돌"""
    kind: StoneKind


@dataclass(frozen=True)
class Resolved:
    """관측으로 색이 확정된 돌"""
    color: Color


EMPTY = Empty()
Cell = Union[Empty, Superposed, Resolved]


class Board:
    """
    11x11 칸 상태 격자
    - 칸은 EMPTY / Superposed / Resolved 중 하나
    - 좌표는 (row, col), 0부터 시작
    """

    def __init__(self, cells: Optional[List[List[Cell]]] = None):
        n = BOARD_SIZE
        if cells is None:
            cells = [[EMPTY for _ in range(n)] for _ in range(n)]
        elif len(cells) != n or any(len(r) != n for r in cells):
            raise ValueError(f"board는 {n}x{n} 이어야 합니다.")
        self._cells: List[List[Cell]] = cells

    @staticmethod
    def in_bounds(row: int, col: int) -> bool:
        return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE

    def _check(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise OutOfBounds(f"보드 범위를 벗어났습니다: ({row}, {col})")

    def get(self, row: int, col: int) -> Cell:
        self._check(row, col)
        return self._cells[row][col]

    def place(self, row: int, col: int, kind: StoneKind) -> None:
        self._check(row, col)
        if not isinstance(self._cells[row][col], Empty):
            raise CellOccupied(f"이미 돌이 놓인 자리입니다: ({row}, {col})")
        self._cells[row][col] = Superposed(kind)

    def resolve(self, row: int, col: int, color: Color) -> None:
        """관측 엔진 전용: 돌이 있는 칸의 색을 확정"""
        self._check(row, col)
        if isinstance(self._cells[row][col], Empty):
            raise ValueError(f"빈 칸은 확정할 수 없습니다: ({row}, {col})")
        self._cells[row][col] = Resolved(color)

    def snapshot(self) -> "Board":
        # 칸 값은 불변 객체라 행 복사만으로 깊은 복사가 된다
        return Board([list(r) for r in self._cells])

    # ---------------- 순회 ----------------

    def iter_non_empty(self) -> Iterator[Tuple[int, int, Cell]]:
        """행 우선 순서로 돌이 있는 칸을 순회"""
        for r, cells in enumerate(self._cells):
            for c, cell in enumerate(cells):
                if not isinstance(cell, Empty):
                    yield r, c, cell

    def for_each_non_empty(self, fn: Callable[[int, int, Cell], None]) -> None:
        for r, c, cell in self.iter_non_empty():
            fn(r, c, cell)

    def stone_count(self) -> int:
        return sum(1 for _ in self.iter_non_empty())

    def is_empty(self) -> bool:
        return self.stone_count() == 0

    def is_fully_resolved(self) -> bool:
        return all(isinstance(cell, Resolved) for _, _, cell in self.iter_non_empty())

    def is_color(self, row: int, col: int, color: Color) -> bool:
        """범위 밖이거나 미확정이면 False"""
        if not self.in_bounds(row, col):
            return False
        cell = self._cells[row][col]
        return isinstance(cell, Resolved) and cell.color == color

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        return f"Board(stones={self.stone_count()})"

    # ---------------- 표시용 ----------------

    def to_json(self) -> List[List[Optional[str]]]:
        """
        프론트 렌더링용 격자
        - None: 빈 칸
        - "p90" / "p70" / "p10" / "p30": 확률 돌
        - "black" / "white": 확정된 돌
        """
        out: List[List[Optional[str]]] = []
        for cells in self._cells:
            row: List[Optional[str]] = []
            for cell in cells:
                if isinstance(cell, Superposed):
                    row.append(cell.kind.css_class)
                elif isinstance(cell, Resolved):
                    row.append("black" if cell.color == Color.BLACK else "white")
                else:
                    row.append(None)
            out.append(row)
        return out

    def render_text(self) -> str:
        mp = {None: ".", "black": "●", "white": "○",
              "p90": "9", "p70": "7", "p10": "1", "p30": "3"}
        lines = ["   " + " ".join(f"{i:2d}" for i in range(BOARD_SIZE))]
        for i, row in enumerate(self.to_json()):
            lines.append(f"{i:2d} " + " ".join(f"{mp[v]:>2}" for v in row))
        return "\n".join(lines)
