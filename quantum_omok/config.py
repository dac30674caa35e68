# quantum_omok/config.py
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv(dotenv_path=Path(__file__).with_name(".env"), override=False)


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def _env_int(name: str) -> Optional[int]:
    v = os.getenv(name, "").strip()
    if not v:
        return None
    try:
        return int(v)
    except ValueError:
        return None


# 관측 후 승리 판정까지 대기 시간(초)
OMOK_OBSERVE_DELAY_SEC = _env_float("OMOK_OBSERVE_DELAY_SEC", 3.0)

# 관측 난수 시드 (비우면 OS 엔트로피 사용)
OMOK_RANDOM_SEED = _env_int("OMOK_RANDOM_SEED")

OMOK_LOG_LEVEL = os.getenv("OMOK_LOG_LEVEL", "INFO").upper()

CORS_ORIGINS_STR = os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")
ALLOWED_ORIGINS: List[str] = [o.strip() for o in CORS_ORIGINS_STR.split(",") if o.strip()]
