# RoomScan - Panoramic Room Inventory Estimation Module
"""
RoomScan Module

360° 파노라마 룸 사진에서 가구와 구조 요소(문, 창문, 캐비닛 등)의
개수와 신뢰도를 룸 유형별로 추정하는 시스템

Pipeline Processors:
    1. 멀티뷰 계획 (1_view_plan.py)
    2. 뷰 렌더링 (2_region_render.py)
    3. YOLO 분류 (3_YOLO_classify.py)
    4. 탐지 융합 (4_detection_fusion.py)
    5. 중복 제거 / 품질 평가 (5_deduplicate.py)
    6. 구조 요소 추정 (6_architectural_estimate.py)
    7. 룸 기대치 검증 (7_room_validate.py)

Directory Structure:
    roomscan/
    ├── pipeline/           # 통합 파이프라인 오케스트레이터
    ├── processors/         # AI Logic 단계별 모듈
    ├── data/               # Knowledge Base (임계값, 룸 사전확률)
    ├── utils/              # 유틸리티 (이미지 처리)
    ├── contracts.py        # 단계 간 데이터 구조
    ├── exceptions.py       # 예외
    └── config.py           # 설정

Usage:
    from roomscan import RoomAnalysisPipeline

    pipeline = RoomAnalysisPipeline()
    pipeline.initialize()
    results = await pipeline.analyze_room(image, "kitchen")
"""

__version__ = "1.0.0"

# 주요 클래스 노출
from .contracts import (
    RoomType,
    EnhancementLevel,
    QualityTier,
    ItemKind,
    ViewDescriptor,
    RawDetection,
    ItemEstimate,
)
from .exceptions import (
    RoomScanError,
    NotInitializedError,
    InitializationFailure,
    ClassifierFailure,
)
from .pipeline import RoomAnalysisPipeline
from .processors import (
    ViewPlanner,
    RegionRenderer,
    YoloClassifier,
    DetectionFusionEngine,
    Deduplicator,
    ArchitecturalEstimator,
    RoomValidator,
)

__all__ = [
    # Pipeline
    'RoomAnalysisPipeline',
    # Contracts
    'RoomType',
    'EnhancementLevel',
    'QualityTier',
    'ItemKind',
    'ViewDescriptor',
    'RawDetection',
    'ItemEstimate',
    # Errors
    'RoomScanError',
    'NotInitializedError',
    'InitializationFailure',
    'ClassifierFailure',
    # Processors
    'ViewPlanner',
    'RegionRenderer',
    'YoloClassifier',
    'DetectionFusionEngine',
    'Deduplicator',
    'ArchitecturalEstimator',
    'RoomValidator'
]
