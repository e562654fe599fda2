import math
from typing import Sequence


def round_half_up(value: float) -> int:
    """0.5는 항상 올림 (Python round()의 banker's rounding 회피)"""
    return int(math.floor(value + 0.5))


def to_percent(confidence: float) -> int:
    """0~1 신뢰도 → 0~100 정수 퍼센트"""
    return round_half_up(confidence * 100)


def mean_percent(values: Sequence[int]) -> int:
    """정수 퍼센트 시퀀스의 산술 평균 (반올림)"""
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))
