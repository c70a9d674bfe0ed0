"""
數值服務：unsigned 寬度與飽和運算

純計算邏輯，不涉及狀態轉換
"""
U32_MAX = 2 ** 32 - 1
U64_MAX = 2 ** 64 - 1
U128_MAX = 2 ** 128 - 1

MS_PER_DAY = 86_400_000


def is_within(value: int, limit: int) -> bool:
    """value 是否落在 0..limit（含）之間"""
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= limit


def saturating_add(a: int, b: int, limit: int = U64_MAX) -> int:
    """
    飽和加法：結果超過 limit 時停在 limit，不會繞回

    範例：
        saturating_add(1, 2) -> 3
        saturating_add(U64_MAX, 1) -> U64_MAX
    """
    return min(a + b, limit)


def saturating_mul(a: int, b: int, limit: int = U64_MAX) -> int:
    """飽和乘法，規則同 saturating_add"""
    return min(a * b, limit)


def activation_end_ms(now_ms: int, term_days: int) -> int:
    """
    計算房間啟動後的結束時間（epoch-ms）

    公式：now_ms + term_days * 86_400_000，任一步溢位都停在 u64 上限
    """
    return saturating_add(now_ms, saturating_mul(term_days, MS_PER_DAY))
