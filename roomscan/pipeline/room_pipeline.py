"""
Room Analysis Pipeline

파노라마 룸 사진 1장 → 가구/구조 요소별 개수 + 신뢰도 추정 파이프라인:

1. 이미지 크기 + 룸 유형으로 멀티뷰 계획
2. 뷰별 렌더링 → 분류기 호출 (기본: 순차 처리)
3. 가중치/임계값/문맥 필터로 탐지 융합
4. 과대계수 전략별 중복 제거 + 품질 등급
5. 룸 사전확률 기반 구조 요소 추정
6. object + architectural 병합 후 룸 기대치로 보정

분류기 호출이 하나라도 실패하면 부분 결과 없이 빈 딕셔너리를 반환합니다.
("탐지 없음"과 "파이프라인 실패"는 반환값으로 구분되지 않으며 로그로만 확인 가능)
"""

import asyncio
import inspect
import logging
import random
from typing import Any, Dict, List, Optional

from PIL import Image

from roomscan.config import Config
from roomscan.contracts import (
    ItemEstimate,
    RawDetection,
    RoomType,
    ViewDescriptor,
    ViewRenderer,
    VisualClassifier,
)
from roomscan.data.knowledge_base import (
    get_all_supported_objects,
    get_room_type_from_name,
    get_supported_room_types,
)
from roomscan.exceptions import ClassifierFailure, NotInitializedError
from roomscan.processors import (
    ArchitecturalEstimator,
    Deduplicator,
    DetectionFusionEngine,
    RegionRenderer,
    RoomValidator,
    ViewPlanner,
    YoloClassifier,
    to_raw_detections,
)
from roomscan.utils.image_ops import ImageUtils

logger = logging.getLogger(__name__)


class RoomAnalysisPipeline:
    """
    룸 분석 통합 파이프라인

    AI Logic Stages:
        Stage 1: ViewPlanner - 멀티뷰 계획
        Stage 2: RegionRenderer - 뷰 크롭 + 필터
        Stage 3: YoloClassifier - 뷰별 객체 분류
        Stage 4: DetectionFusionEngine - 가중 융합 + 문맥 필터
        Stage 5: Deduplicator - 중복 제거 + 품질 평가
        Stage 6: ArchitecturalEstimator - 구조 요소 추정 (통계적 placeholder)
        Stage 7: RoomValidator - 룸 기대치 검증

    Usage:
        pipeline = RoomAnalysisPipeline()
        if pipeline.initialize():
            results = await pipeline.analyze_room(image, "kitchen")
    """

    def __init__(
        self,
        classifier: Optional[VisualClassifier] = None,
        renderer: Optional[ViewRenderer] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        max_concurrent_views: Optional[int] = None,
        device_id: Optional[int] = None
    ):
        """
        Args:
            classifier: 시각 분류기 (None이면 YoloClassifier)
            renderer: 뷰 렌더러 (None이면 RegionRenderer)
            rng: 구조 요소 추정용 난수 생성기
            seed: rng가 없을 때 사용할 시드
            max_concurrent_views: 동시에 처리할 뷰 수 (1이면 순차)
            device_id: GPU 디바이스 ID (기본 분류기 생성 시에만 사용)
        """
        self.classifier = classifier if classifier is not None else YoloClassifier(device_id=device_id)
        self.renderer = renderer if renderer is not None else RegionRenderer()
        self.planner = ViewPlanner()
        self.architectural_estimator = ArchitecturalEstimator(rng=rng, seed=seed)
        self.max_concurrent_views = max_concurrent_views or Config.MAX_CONCURRENT_VIEWS
        self.is_initialized = False

        if self.max_concurrent_views > 1 and not self.supports_concurrent_views():
            logger.warning(
                f"[RoomAnalysisPipeline] {type(self.classifier).__name__} is not thread-safe, "
                f"max_concurrent_views={self.max_concurrent_views} ignored (views run sequentially)"
            )

    # =========================================================================
    # 초기화
    # =========================================================================

    def initialize(self) -> bool:
        """
        분류기 모델을 로드합니다. 실패 시 False를 반환하며 다시 호출할 수 있습니다.
        """
        if self.is_initialized:
            return True

        logger.info("[RoomAnalysisPipeline] Loading object detection model...")
        try:
            self.classifier.load()
        except Exception:
            logger.exception("[RoomAnalysisPipeline] Failed to initialize object detection")
            return False

        self.is_initialized = True
        logger.info("[RoomAnalysisPipeline] Object detection initialized successfully")
        return True

    # =========================================================================
    # 룸 유형
    # =========================================================================

    @staticmethod
    def get_room_type_from_name(room_name: Optional[str]) -> RoomType:
        return get_room_type_from_name(room_name)

    # =========================================================================
    # Stage 1-3: 뷰 계획 → 렌더링 → 분류
    # =========================================================================

    def supports_concurrent_views(self) -> bool:
        """
        코루틴 detect() 이거나 thread_safe=True를 선언한 분류기만 뷰 병렬 처리 허용
        (공유 모델을 여러 스레드에서 동시에 호출하지 않기 위함)
        """
        if inspect.iscoroutinefunction(self.classifier.detect):
            return True
        return bool(getattr(self.classifier, "thread_safe", False))

    def _render_and_detect(self, image: Image.Image, view: ViewDescriptor) -> List[Dict[str, Any]]:
        region = self.renderer.render(image, view)
        return self.classifier.detect(region, view.max_results)

    async def classify_view(self, image: Image.Image, view: ViewDescriptor) -> List[RawDetection]:
        """
        뷰 하나를 렌더링하고 분류합니다.

        Raises:
            ClassifierFailure: 렌더링 또는 분류 중 예외 발생
        """
        try:
            if inspect.iscoroutinefunction(self.classifier.detect):
                region = self.renderer.render(image, view)
                predictions = await self.classifier.detect(region, view.max_results)
            else:
                predictions = await asyncio.to_thread(self._render_and_detect, image, view)
        except Exception as e:
            raise ClassifierFailure(view.source_tag, e) from e

        # 분류기가 상한을 넘겨 반환해도 뷰별 max_results까지만 사용
        return to_raw_detections(list(predictions)[:view.max_results], view)

    async def collect_detections(self, image: Image.Image, views: List[ViewDescriptor]) -> List[RawDetection]:
        """
        모든 뷰의 RawDetection을 뷰 계획 순서대로 수집합니다.

        max_concurrent_views > 1이고 분류기가 동시 호출을 허용하면
        뷰별 독립 버퍼로 병렬 처리하되 결과 병합 순서는 동일하게 유지합니다.
        """
        if self.max_concurrent_views <= 1 or not self.supports_concurrent_views():
            detections = []
            for view in views:
                detections.extend(await self.classify_view(image, view))
            return detections

        semaphore = asyncio.Semaphore(self.max_concurrent_views)

        async def classify_with_limit(view: ViewDescriptor) -> List[RawDetection]:
            async with semaphore:
                return await self.classify_view(image, view)

        per_view = await asyncio.gather(*(classify_with_limit(v) for v in views))
        return [d for view_detections in per_view for d in view_detections]

    # =========================================================================
    # 통합 처리
    # =========================================================================

    async def detect_objects(self, image: Any, room_type: RoomType = RoomType.GENERAL) -> Dict[str, ItemEstimate]:
        """
        Args:
            image: PIL 이미지, RGB numpy 배열 또는 이미지 경로
            room_type: 룸 유형

        Returns:
            {label: ItemEstimate} (분류기 실패 시 빈 딕셔너리)

        Raises:
            NotInitializedError: initialize() 성공 전 호출
        """
        if not self.is_initialized or not self.classifier.is_loaded:
            raise NotInitializedError()

        pil_image = ImageUtils.to_pil(image)
        views = self.planner.plan(pil_image.width, pil_image.height, room_type)
        logger.info(
            f"[RoomAnalysisPipeline] Analyzing {pil_image.width}x{pil_image.height} "
            f"as {room_type.value} with {len(views)} views"
        )

        try:
            detections = await self.collect_detections(pil_image, views)
        except ClassifierFailure:
            logger.exception("[RoomAnalysisPipeline] Detection error")
            return {}

        accumulators = DetectionFusionEngine(room_type).fuse(detections)
        object_results = Deduplicator(room_type).process(accumulators)
        architectural_results = self.architectural_estimator.estimate(room_type)

        results = RoomValidator(room_type).combine_and_validate(object_results, architectural_results)
        logger.info(
            f"[RoomAnalysisPipeline] {len(detections)} raw detections -> {len(results)} items"
        )
        return results

    async def analyze_room(self, image: Any, room_name: Optional[str]) -> Dict[str, ItemEstimate]:
        """
        UI 진입점: 룸 이름으로 룸 유형을 정하고 전체 파이프라인을 실행합니다.
        """
        room_type = self.get_room_type_from_name(room_name)
        return await self.detect_objects(image, room_type)

    def analyze_room_sync(self, image: Any, room_name: Optional[str]) -> Dict[str, ItemEstimate]:
        """analyze_room 동기 버전 (이벤트 루프 밖에서 호출)"""
        return asyncio.run(self.analyze_room(image, room_name))

    # =========================================================================
    # 조회 / 직렬화
    # =========================================================================

    def get_detection_stats(self) -> Dict[str, Any]:
        return {
            "isInitialized": self.is_initialized,
            "modelLoaded": bool(self.classifier.is_loaded),
            "supportedObjects": list(get_all_supported_objects().keys()),
            "supportedRoomTypes": get_supported_room_types()
        }

    @staticmethod
    def get_all_supported_objects() -> Dict[str, Dict]:
        return get_all_supported_objects()

    @staticmethod
    def to_json_response(results: Dict[str, ItemEstimate]) -> Dict[str, Dict]:
        """
        UI 표시용 JSON 응답을 생성합니다.

        Output format:
        {
            "bed": {"count": 1, "confidences": [50], "maxConfidence": 50, ...},
            "door": {"count": 2, ..., "type": "architectural"}
        }
        """
        return {label: estimate.to_dict() for label, estimate in results.items()}
