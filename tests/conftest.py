import os

# 테스트 중 .env 값과 무관하게 동작하도록 고정
os.environ.setdefault("OMOK_OBSERVE_DELAY_SEC", "3")

import pytest  # noqa: E402

from quantum_omok.game import QuantumOmokGame  # noqa: E402


class FixedRandom:
    """항상 같은 값을 돌려주는 난수원 (random() 규약)"""

    def __init__(self, value: float):
        self.value = value
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.value


class SequenceRandom:
    """정해진 순서대로 값을 돌려주고, 끝나면 마지막 값을 반복"""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        v = self.values[min(self.calls, len(self.values) - 1)]
        self.calls += 1
        return v


class ManualCall:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """fire_all()을 부를 때만 예약된 콜백을 실행"""

    def __init__(self):
        self.calls = []

    def schedule(self, delay, callback):
        call = ManualCall(delay, callback)
        self.calls.append(call)
        return call

    @property
    def pending(self):
        return [c for c in self.calls if not c.cancelled and not c.fired]

    def fire_all(self, include_cancelled: bool = False):
        for c in list(self.calls):
            if c.fired or (c.cancelled and not include_cancelled):
                continue
            c.fired = True
            c.callback()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def all_black_game(scheduler):
    # 0.0 * 100 < 모든 흑 확률(최소 10) → 전부 흑으로 확정
    return QuantumOmokGame(rng=FixedRandom(0.0), scheduler=scheduler, delay=3.0)


@pytest.fixture
def all_white_game(scheduler):
    # 0.999 * 100 = 99.9 >= 모든 흑 확률(최대 90) → 전부 백으로 확정
    return QuantumOmokGame(rng=FixedRandom(0.999), scheduler=scheduler, delay=3.0)
