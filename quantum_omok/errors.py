# quantum_omok/errors.py
"""
게임 규칙 위반 예외
- 모두 복구 가능한 오류: 거부된 조작은 게임 상태를 바꾸지 않는다.
- code는 프론트가 분기할 때 쓰는 고정 문자열.
"""


class GameError(Exception):
    code = "game_error"
    default_message = "유효하지 않은 조작입니다."

    def __init__(self, message: str = ""):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class OutOfBounds(GameError):
    code = "out_of_bounds"
    default_message = "보드 범위를 벗어났습니다."


class CellOccupied(GameError):
    code = "cell_occupied"
    default_message = "이미 돌이 놓인 자리입니다."


class GameLocked(GameError):
    code = "game_locked"
    default_message = "지금은 이 조작을 할 수 없습니다."


class AlreadyCollapsed(GameError):
    code = "already_collapsed"
    default_message = "이미 관측된 상태입니다."


class NotCollapsed(GameError):
    code = "not_collapsed"
    default_message = "관측된 상태가 아닙니다."


class WinnerAlreadyDeclared(GameError):
    code = "winner_already_declared"
    default_message = "게임이 이미 종료되었습니다."


class GameNotFound(GameError):
    code = "game_not_found"
    default_message = "게임을 찾을 수 없습니다."
