# quantum_omok/scheduler.py
"""지연 실행(관측 후 승리 판정 대기)용 타이머"""

from __future__ import annotations
import threading
from typing import Callable, Protocol


class ScheduledCall(Protocol):
    cancelled: bool

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledCall: ...


class TimerCall:
    def __init__(self, timer: threading.Timer):
        self._timer = timer
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True
        self._timer.cancel()


class ThreadingScheduler:
    """threading.Timer 기반 기본 스케줄러 (데몬 스레드)"""

    def schedule(self, delay: float, callback: Callable[[], None]) -> TimerCall:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        call = TimerCall(timer)
        timer.start()
        return call
