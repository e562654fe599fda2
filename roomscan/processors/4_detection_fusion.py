"""
Stage 4: 멀티뷰 탐지 융합

모든 뷰의 원시 탐지를 모아
1. 뷰 가중치 적용 (adjusted = score * fusion_weight)
2. 룸별 라벨 임계값 필터링
3. 문맥 기반 필터링 (룸에 어울리지 않는 객체, 저신뢰 person)
4. 라벨별 누적 통계(ClassAccumulator) 생성
"""

import logging
from typing import Any, Dict, Iterable, List

from roomscan.contracts import ClassAccumulator, RawDetection, RoomType, ViewDescriptor
from roomscan.data.knowledge_base import (
    CONTEXT_BASE_CONFIDENCE,
    PERSON_MIN_CONFIDENCE,
    get_context_filter,
    get_room_thresholds,
)
from roomscan.utils.math_ops import to_percent
from roomscan.config import Config

logger = logging.getLogger(__name__)

# center(1.2) / focus 셀(1.1) 가중치는 원 점수를 100% 넘게 올릴 수 있음
MAX_CONFIDENCE_PERCENT = 100


def to_raw_detections(predictions: Iterable[Dict[str, Any]], view: ViewDescriptor) -> List[RawDetection]:
    """
    분류기 출력에 뷰 태그/가중치를 붙여 RawDetection으로 변환합니다.

    Args:
        predictions: [{"label", "score", "box"}, ...]
        view: 예측이 나온 뷰

    Returns:
        RawDetection 리스트
    """
    return [
        RawDetection(
            label=p["label"],
            raw_confidence=float(p["score"]),
            source_tag=view.source_tag,
            fusion_weight=view.fusion_weight,
            box=p.get("box")
        )
        for p in predictions
    ]


class DetectionFusionEngine:
    """
    탐지 융합 엔진

    AI Logic Step 4: RawDetection 스트림 → {label: ClassAccumulator}

    룸별 임계값 테이블은 생성 시 한 번만 계산합니다.
    누적 상태는 fuse() 호출마다 새 딕셔너리에 만들어지므로
    엔진 인스턴스를 여러 분석에 재사용해도 상태가 섞이지 않습니다.
    """

    def __init__(self, room_type: RoomType = RoomType.GENERAL):
        self.room_type = room_type
        self.thresholds = get_room_thresholds(room_type)
        self.context_filter = get_context_filter(room_type)

    def threshold_for(self, label: str) -> float:
        return self.thresholds.get(label, Config.DEFAULT_THRESHOLD)

    def should_filter(self, label: str, adjusted_confidence: float) -> bool:
        """
        문맥 기반 필터링 여부

        Returns:
            True면 탐지를 버림
        """
        context = self.context_filter
        if context and label in context["unlikely"]:
            return adjusted_confidence < CONTEXT_BASE_CONFIDENCE + context["threshold_boost"]

        if label == "person" and adjusted_confidence < PERSON_MIN_CONFIDENCE:
            return True

        return False

    def accept(self, detection: RawDetection) -> bool:
        """임계값 + 문맥 필터를 모두 통과하면 True"""
        confidence = detection.adjusted_confidence

        if confidence < self.threshold_for(detection.label):
            logger.debug(
                f"[DetectionFusion] Rejected {detection.label} from {detection.source_tag}: "
                f"{confidence:.3f} < threshold"
            )
            return False

        if self.should_filter(detection.label, confidence):
            logger.debug(
                f"[DetectionFusion] Context-filtered {detection.label} in {self.room_type.value}: {confidence:.3f}"
            )
            return False

        return True

    def fuse(self, detections: Iterable[RawDetection]) -> Dict[str, ClassAccumulator]:
        """
        Args:
            detections: 모든 뷰의 RawDetection (뷰 계획 순서)

        Returns:
            {label: ClassAccumulator}
        """
        accumulators: Dict[str, ClassAccumulator] = {}

        for detection in detections:
            if not self.accept(detection):
                continue

            acc = accumulators.setdefault(detection.label, ClassAccumulator())
            # 임계값 비교는 가중치 적용 원값으로, 저장값은 100% 상한
            percent = min(MAX_CONFIDENCE_PERCENT, to_percent(detection.adjusted_confidence))
            acc.add(percent, detection.source_tag)

        return accumulators
