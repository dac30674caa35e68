# quantum_omok/game.py

from __future__ import annotations
import logging
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from quantum_omok import turns
from quantum_omok.board import Board
from quantum_omok.collapse import CollapseEngine, RandomSource
from quantum_omok.config import OMOK_OBSERVE_DELAY_SEC
from quantum_omok.errors import (
    AlreadyCollapsed,
    GameError,
    GameLocked,
    NotCollapsed,
    WinnerAlreadyDeclared,
)
from quantum_omok.scheduler import ScheduledCall, Scheduler, ThreadingScheduler
from quantum_omok.stones import Color, StoneKind
from quantum_omok.win import winning_line

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    PLAYING = "playing"                          # 확률 돌 착수 중
    AWAITING_RESOLUTION = "awaiting_resolution"  # 관측 직후, 승리 판정 대기
    OBSERVED = "observed"                        # 관측 완료, 승자 없음 (되돌리기 가능)
    GAME_OVER = "game_over"


@dataclass
class GameState:
    board: Board = field(default_factory=Board)
    turn: Color = Color.BLACK
    move_count: int = 0
    game_over: bool = False
    collapsed: bool = False
    pre_collapse_snapshot: Optional[Board] = None
    last_placed_kind: Optional[StoneKind] = None
    last_placed: Optional[Tuple[int, int]] = None
    phase: Phase = Phase.PLAYING
    winner: Optional[Color] = None
    winning_line: Optional[List[Tuple[int, int]]] = None
    observations: int = 0

    @property
    def next_kind(self) -> Optional[StoneKind]:
        if self.phase != Phase.PLAYING:
            return None
        return turns.stone_kind_for(self.move_count, self.turn)

    def to_dict(self) -> dict:
        nk = self.next_kind
        last = None
        if self.last_placed is not None and self.last_placed_kind is not None:
            last = {"row": self.last_placed[0], "col": self.last_placed[1],
                    "kind": self.last_placed_kind.name}
        return {
            "board": self.board.to_json(),
            "current_turn": int(self.turn),
            "move_count": self.move_count,
            "phase": self.phase.value,
            "collapsed": self.collapsed,
            "game_over": self.game_over,
            "winner": int(self.winner) if self.winner is not None else None,
            "winning_line": [list(p) for p in self.winning_line] if self.winning_line else None,
            "last_placed": last,
            "next_kind": nk.name if nk else None,
            "observations": self.observations,
        }


class QuantumOmokGame:
    """
    양자 오목 진행기
    - 착수 → 관측(붕괴) → 지연 후 승리 판정 → 종료 또는 되돌리기
    - 거부된 조작은 GameError를 던지고 상태는 그대로 둔다
    - 타이머 스레드와 요청 처리가 겹치지 않도록 모든 전이는 락 안에서 수행
    """

    def __init__(
        self,
        rng: Optional[RandomSource] = None,
        scheduler: Optional[Scheduler] = None,
        delay: float = OMOK_OBSERVE_DELAY_SEC,
    ):
        self.engine = CollapseEngine(rng)
        self.scheduler: Scheduler = scheduler if scheduler is not None else ThreadingScheduler()
        self.delay = delay
        self._lock = threading.RLock()
        self._pending: Optional[ScheduledCall] = None
        self._generation = 0
        self.state = GameState()

    # ---------------- 읽기 전용 ----------------

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def turn(self) -> Color:
        return self.state.turn

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    @property
    def winner(self) -> Optional[Color]:
        return self.state.winner

    @property
    def collapsed(self) -> bool:
        return self.state.collapsed

    # ---------------- 진행 ----------------

    def new_game(self) -> GameState:
        """대기 중인 판정을 취소하고 상태 객체를 통째로 교체"""
        with self._lock:
            self._cancel_pending()
            self._generation += 1
            self.state = GameState()
            logger.info("[new_game] board reset")
            return self.state

    reset = new_game

    def close(self) -> None:
        with self._lock:
            self._cancel_pending()
            self._generation += 1

    def place_move(self, row: int, col: int) -> GameState:
        with self._lock:
            s = self.state
            if s.phase != Phase.PLAYING:
                raise GameLocked(f"지금은 돌을 둘 수 없습니다. ({s.phase.value})")
            kind, nxt, count = turns.advance(s.move_count, s.turn)
            try:
                s.board.place(row, col, kind)  # OutOfBounds / CellOccupied
            except GameError as e:
                logger.debug("[reject] %s: %s", e.code, e.message)
                raise
            s.last_placed_kind = kind
            s.last_placed = (row, col)
            s.turn = nxt
            s.move_count = count
            logger.debug("[place] #%d %s at (%d, %d)", count, kind.name, row, col)
            return s

    def observe(self) -> GameState:
        with self._lock:
            s = self.state
            if s.phase in (Phase.GAME_OVER, Phase.AWAITING_RESOLUTION):
                raise GameLocked(f"지금은 관측할 수 없습니다. ({s.phase.value})")
            if s.collapsed:
                raise AlreadyCollapsed()

            snapshot = s.board.snapshot()
            s.board = self.engine.collapse(s.board)
            s.pre_collapse_snapshot = snapshot
            s.collapsed = True
            s.phase = Phase.AWAITING_RESOLUTION
            s.observations += 1

            self._generation += 1
            gen = self._generation
            self._pending = self.scheduler.schedule(self.delay, lambda: self._evaluate(gen))
            logger.info("[observe] %d stones collapsed, win check in %.1fs",
                        s.board.stone_count(), self.delay)
            return s

    def revert(self) -> GameState:
        with self._lock:
            s = self.state
            if s.phase == Phase.GAME_OVER:
                raise WinnerAlreadyDeclared()
            if s.phase == Phase.AWAITING_RESOLUTION:
                raise GameLocked("승리 판정 중에는 되돌릴 수 없습니다.")
            if not s.collapsed or s.pre_collapse_snapshot is None:
                raise NotCollapsed()

            s.board = self.engine.revert(s.pre_collapse_snapshot)
            s.pre_collapse_snapshot = None
            s.collapsed = False
            s.phase = Phase.PLAYING
            logger.info("[revert] back to superposed board")
            return s

    def toggle_observation(self) -> GameState:
        """관측/되돌리기 단일 버튼"""
        with self._lock:
            if self.state.phase == Phase.OBSERVED:
                return self.revert()
            return self.observe()

    # ---------------- 내부 로직 ----------------

    def _evaluate(self, generation: int) -> None:
        with self._lock:
            s = self.state
            if generation != self._generation or s.phase != Phase.AWAITING_RESOLUTION:
                logger.debug("[evaluate] stale timer ignored (gen=%d)", generation)
                return
            self._pending = None

            black_line = winning_line(s.board, Color.BLACK)
            white_line = winning_line(s.board, Color.WHITE)

            if black_line and white_line:
                # 쌍방 5목: 마지막에 둔 플레이어(관측 선언자로 간주)의 승리
                winner = s.last_placed_kind.placed_by
                line = black_line if winner == Color.BLACK else white_line
            elif black_line:
                winner, line = Color.BLACK, black_line
            elif white_line:
                winner, line = Color.WHITE, white_line
            else:
                s.phase = Phase.OBSERVED
                logger.info("[evaluate] no five in a row, revert available")
                return

            s.winner = winner
            s.winning_line = line
            s.game_over = True
            s.phase = Phase.GAME_OVER
            logger.info("[evaluate] game over, winner=%s", winner.name)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def to_dict(self) -> dict:
        with self._lock:
            return self.state.to_dict()

    # -------- 디버그 보조 --------
    def render_text(self) -> str:
        return self.state.board.render_text()

    def print_board(self) -> None:
        print(self.render_text())


if __name__ == "__main__":
    # 간단 자가 테스트
    g = QuantumOmokGame(delay=0.1)
    g.place_move(5, 5)
    g.place_move(5, 6)
    g.print_board()
    g.observe()
    g.print_board()
    time.sleep(0.2)
    print(g.phase, g.winner)
