"""
RoomScan Pipeline Processors

AI Logic 단계별 모듈:
1. 멀티뷰 계획 (전체, 중앙 크롭, 적응형 그리드, 엣지 강화)
2. 뷰 렌더링 (크롭 + 픽셀 필터)
3. YOLO 분류
4. 멀티뷰 탐지 융합 (가중치, 임계값, 문맥 필터)
5. 중복 제거 및 품질 평가
6. 구조 요소 추정 (룸 사전확률)
7. 룸 기대치 검증
"""

import importlib

# 숫자가 포함된 파일명을 위한 동적 import
_stage1 = importlib.import_module('.1_view_plan', package='roomscan.processors')
_stage2 = importlib.import_module('.2_region_render', package='roomscan.processors')
_stage3 = importlib.import_module('.3_YOLO_classify', package='roomscan.processors')
_stage4 = importlib.import_module('.4_detection_fusion', package='roomscan.processors')
_stage5 = importlib.import_module('.5_deduplicate', package='roomscan.processors')
_stage6 = importlib.import_module('.6_architectural_estimate', package='roomscan.processors')
_stage7 = importlib.import_module('.7_room_validate', package='roomscan.processors')

# 클래스 노출
ViewPlanner = _stage1.ViewPlanner
RegionRenderer = _stage2.RegionRenderer
YoloClassifier = _stage3.YoloClassifier
DetectionFusionEngine = _stage4.DetectionFusionEngine
to_raw_detections = _stage4.to_raw_detections
Deduplicator = _stage5.Deduplicator
deduplication_divisor = _stage5.deduplication_divisor
estimate_count = _stage5.estimate_count
assess_quality = _stage5.assess_quality
ArchitecturalEstimator = _stage6.ArchitecturalEstimator
RoomValidator = _stage7.RoomValidator
merge_results = _stage7.merge_results

__all__ = [
    # Step 1-3: Views & classification
    'ViewPlanner',
    'RegionRenderer',
    'YoloClassifier',
    # Step 4-5: Fusion
    'DetectionFusionEngine',
    'to_raw_detections',
    'Deduplicator',
    'deduplication_divisor',
    'estimate_count',
    'assess_quality',
    # Step 6-7: Priors
    'ArchitecturalEstimator',
    'RoomValidator',
    'merge_results'
]
