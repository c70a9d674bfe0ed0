"""
時間來源：提供 epoch 毫秒

只在房間啟動時讀取一次
"""
import time
from typing import Callable

Clock = Callable[[], int]


def current_time_ms() -> int:
    return time.time_ns() // 1_000_000


def get_clock() -> Clock:
    """FastAPI dependency：測試時可用 dependency_overrides 換成固定時間"""
    return current_time_ms
