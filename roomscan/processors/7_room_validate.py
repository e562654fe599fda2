"""
Stage 7: 룸 기대치 검증

object 추정치와 구조 요소 추정치를 병합한 뒤 룸 유형별 기대치로 보정합니다.
- should_have: 신뢰도 +10 (최대 95)
- might_have: 참고용 (변경 없음)
- unlikely: max_confidence < 70 이면 제거
"""

import logging
from dataclasses import replace
from typing import Dict

from roomscan.contracts import ItemEstimate, RoomType
from roomscan.data.knowledge_base import (
    CONFIDENCE_CAP,
    EXPECTED_CONFIDENCE_BOOST,
    UNLIKELY_REMOVAL_CONFIDENCE,
    get_room_expectations,
)

logger = logging.getLogger(__name__)


def _boost(value: int) -> int:
    return min(CONFIDENCE_CAP, value + EXPECTED_CONFIDENCE_BOOST)


def merge_results(
    object_results: Dict[str, ItemEstimate],
    architectural_results: Dict[str, ItemEstimate]
) -> Dict[str, ItemEstimate]:
    """
    두 결과를 병합합니다. 라벨이 겹치면 object 추정치(이미지 근거)를 유지합니다.
    """
    combined = dict(object_results)
    for label, estimate in architectural_results.items():
        if label in combined:
            logger.debug(f"[RoomValidator] '{label}' detected as object, architectural estimate dropped")
            continue
        combined[label] = estimate
    return combined


class RoomValidator:
    """
    룸 기대치 검증기

    AI Logic Step 7: 병합된 ResultMap → 보정된 ResultMap (입력은 변경하지 않음)
    """

    def __init__(self, room_type: RoomType = RoomType.GENERAL):
        self.room_type = room_type
        self.expectations = get_room_expectations(room_type)

    def validate(self, results: Dict[str, ItemEstimate]) -> Dict[str, ItemEstimate]:
        validated = dict(results)
        expectation = self.expectations
        if not expectation:
            return validated

        for label in expectation["should_have"]:
            item = validated.get(label)
            if item is None:
                continue
            validated[label] = replace(
                item,
                confidences=[_boost(c) for c in item.confidences],
                max_confidence=_boost(item.max_confidence),
                avg_confidence=_boost(item.avg_confidence)
            )

        for label in expectation["unlikely"]:
            item = validated.get(label)
            if item is not None and item.max_confidence < UNLIKELY_REMOVAL_CONFIDENCE:
                logger.debug(f"[RoomValidator] Removed unlikely '{label}' in {self.room_type.value}")
                del validated[label]

        return validated

    def combine_and_validate(
        self,
        object_results: Dict[str, ItemEstimate],
        architectural_results: Dict[str, ItemEstimate]
    ) -> Dict[str, ItemEstimate]:
        return self.validate(merge_results(object_results, architectural_results))
