"""
Stage 6: 구조 요소 추정

문, 창문, 캐비닛, 붙박이장 같은 구조 요소는 COCO 분류기가 거의 탐지하지 못하므로
룸 유형별 사전확률과 전형적 개수 범위로 통계적으로 추정합니다.

NOTE: 이미지 근거가 아닌 통계적 placeholder 입니다.
      결과는 kind=architectural로 표시되며 object 추정치와 같은 신뢰도로 취급하면 안 됩니다.
"""

import logging
import random
from typing import Dict, Optional

from roomscan.contracts import ItemEstimate, ItemKind, QualityTier, RoomType
from roomscan.data.knowledge_base import (
    ARCHITECTURAL_CONFIDENCE_RANGE,
    get_architectural_features,
    get_typical_count_range,
)

logger = logging.getLogger(__name__)

ARCHITECTURAL_SOURCE_TAG = "architectural"


class ArchitecturalEstimator:
    """
    구조 요소 추정기

    AI Logic Step 6: RoomType → {feature: ItemEstimate(kind=architectural)}

    난수 생성기는 주입받습니다 (테스트에서는 seed 고정).
    """

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None):
        """
        Args:
            rng: 사용할 난수 생성기 (None이면 seed로 새로 생성)
            seed: rng가 없을 때 사용할 시드 (None이면 비결정적)
        """
        self.rng = rng if rng is not None else random.Random(seed)

    def estimate(self, room_type: RoomType = RoomType.GENERAL) -> Dict[str, ItemEstimate]:
        features = {}
        min_conf, max_conf = ARCHITECTURAL_CONFIDENCE_RANGE

        for feature_name, feature in get_architectural_features(room_type).items():
            if self.rng.random() >= feature["probability"]:
                continue

            min_count, max_count = get_typical_count_range(feature)
            count = self.rng.randint(min_count, max_count)
            if count <= 0:
                continue

            confidence = self.rng.randint(min_conf, max_conf)
            features[feature_name] = ItemEstimate(
                label=feature_name,
                estimated_count=count,
                occurrence_count=count,
                confidences=[confidence],
                max_confidence=confidence,
                avg_confidence=confidence,
                quality=QualityTier.HIGH if confidence > 75 else QualityTier.MEDIUM,
                kind=ItemKind.ARCHITECTURAL,
                source_tags=[ARCHITECTURAL_SOURCE_TAG]
            )

        logger.debug(f"[ArchitecturalEstimator] {room_type.value}: {sorted(features)}")
        return features
