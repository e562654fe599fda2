"""
Stage 5: 중복 제거 및 품질 평가

겹치는 뷰들은 같은 물체를 반복 탐지하므로 원시 탐지 횟수(occurrence_count)는
실제 개수보다 큽니다. 라벨별 과대계수 전략에 따라 나눗수(divisor)를 정하고
룸별 보정 배수를 적용해 현실적인 개수와 품질 등급을 산출합니다.
"""

import math
from typing import Dict

from roomscan.contracts import ClassAccumulator, ItemEstimate, ItemKind, QualityTier, RoomType
from roomscan.data.knowledge_base import get_dedup_strategy, get_room_multiplier
from roomscan.utils.math_ops import mean_percent


def deduplication_divisor(label: str, source_count: int) -> float:
    """
    Args:
        label: 클래스 라벨
        source_count: 라벨이 탐지된 서로 다른 뷰 수

    Returns:
        원시 탐지 횟수를 나눌 값 (전략 없는 라벨은 1)
    """
    strategy = get_dedup_strategy(label)
    if strategy == "aggressive":
        return max(2, source_count)
    if strategy == "moderate":
        return max(1.5, source_count * 0.8)
    if strategy == "conservative":
        return max(1.2, source_count * 0.6)
    return 1


def estimate_count(label: str, occurrence_count: int, source_count: int, room_type: RoomType) -> int:
    """
    중복 제거 후 개수 추정. 원시 탐지 횟수보다 커지지 않습니다.
    """
    divisor = deduplication_divisor(label, source_count)
    multiplier = get_room_multiplier(label, room_type)
    final_count = max(1, math.ceil(occurrence_count / divisor * multiplier))
    return min(final_count, occurrence_count)


def assess_quality(max_confidence: int, avg_confidence: int, source_count: int) -> QualityTier:
    if max_confidence >= 80 and avg_confidence >= 60 and source_count >= 2:
        return QualityTier.HIGH
    if max_confidence >= 60 and avg_confidence >= 40:
        return QualityTier.MEDIUM
    return QualityTier.LOW


class Deduplicator:
    """
    중복 제거 및 품질 평가기

    AI Logic Step 5: {label: ClassAccumulator} → {label: ItemEstimate(kind=object)}
    """

    def __init__(self, room_type: RoomType = RoomType.GENERAL):
        self.room_type = room_type

    def finalize(self, label: str, acc: ClassAccumulator) -> ItemEstimate:
        """누적 통계 하나를 ItemEstimate로 확정"""
        source_count = len(acc.source_tags)
        avg_confidence = mean_percent(acc.confidences)

        return ItemEstimate(
            label=label,
            estimated_count=estimate_count(label, acc.occurrence_count, source_count, self.room_type),
            occurrence_count=acc.occurrence_count,
            confidences=list(acc.confidences),
            max_confidence=acc.max_confidence,
            avg_confidence=avg_confidence,
            quality=assess_quality(acc.max_confidence, avg_confidence, source_count),
            kind=ItemKind.OBJECT,
            source_tags=list(acc.source_tags)
        )

    def process(self, accumulators: Dict[str, ClassAccumulator]) -> Dict[str, ItemEstimate]:
        return {label: self.finalize(label, acc) for label, acc in accumulators.items()}
