"""
Stage 3: YOLO 객체 분류

렌더링된 뷰 이미지에서 COCO 클래스 객체를 탐지합니다.
COCO 라벨명(couch, dining table, tv, potted plant ...)이
knowledge_base 테이블 키와 그대로 일치합니다.
"""

import logging
from typing import Any, Dict, List, Optional

from PIL import Image

from roomscan.config import Config
from roomscan.exceptions import InitializationFailure

try:
    from ultralytics import YOLO
    HAS_YOLO = True
except ImportError:
    HAS_YOLO = False

logger = logging.getLogger(__name__)


class YoloClassifier:
    """
    YOLO 기반 시각 분류기

    AI Logic Step 3: 뷰 이미지 → [{"label", "score", "box"}, ...]

    load()는 명시적으로 호출해야 하며 (파이프라인 initialize()에서 호출),
    detect()는 같은 모델로 반복 호출해도 호출 간 상태를 공유하지 않습니다.

    NOTE: ultralytics predictor는 하나의 YOLO 인스턴스를 여러 스레드에서
          동시에 호출하면 안전하지 않습니다. thread_safe=False 이므로 파이프라인은
          max_concurrent_views 설정과 무관하게 이 분류기의 뷰를 순차 처리합니다.
    """

    thread_safe = False

    def __init__(
        self,
        model_path: str = None,
        confidence_threshold: float = None,
        device_id: Optional[int] = None
    ):
        """
        Args:
            model_path: YOLO 모델 경로 (None이면 Config에서 가져옴)
            confidence_threshold: 분류기 자체 최소 점수
            device_id: GPU 디바이스 ID (None이면 기본값 사용)
        """
        self.model_path = model_path or Config.YOLO_MODEL_PATH
        self.confidence_threshold = (
            Config.CLASSIFIER_MIN_SCORE if confidence_threshold is None else confidence_threshold
        )
        self.device_id = device_id
        self._device = Config.get_device(device_id)
        self.model = None

    @property
    def is_loaded(self) -> bool:
        return self.model is not None

    def load(self):
        """모델 로드 (이미 로드되어 있으면 무시)"""
        if self.model is not None:
            return

        if not HAS_YOLO:
            raise InitializationFailure("ultralytics not installed")

        logger.info(f"[YoloClassifier] Loading YOLO on {self._device}: {self.model_path}")
        try:
            model = YOLO(self.model_path)
            if "cuda" in self._device:
                model.to(self._device)
        except Exception as e:
            raise InitializationFailure(f"Failed to load {self.model_path}: {e}") from e

        self.model = model
        logger.info(f"[YoloClassifier] Model loaded with {len(self.model.names)} classes")

    def detect(self, region: Image.Image, max_results: int) -> List[Dict[str, Any]]:
        """
        Args:
            region: 렌더링된 뷰 이미지
            max_results: 반환할 최대 탐지 수

        Returns:
            점수 내림차순 [{"label": str, "score": float, "box": [x1, y1, x2, y2]}, ...]
        """
        if self.model is None:
            raise RuntimeError("YoloClassifier.detect() called before load()")

        results = self.model.predict(
            region,
            conf=self.confidence_threshold,
            max_det=max_results,
            verbose=False,
            device=self._device
        )[0]

        if len(results.boxes) == 0:
            return []

        boxes = results.boxes.xyxy.cpu().numpy()
        scores = results.boxes.conf.cpu().numpy()
        classes = results.boxes.cls.cpu().numpy().astype(int)

        detections = [
            {
                "label": self.model.names[int(cls_idx)],
                "score": float(score),
                "box": box.tolist()
            }
            for box, score, cls_idx in zip(boxes, scores, classes)
        ]
        detections.sort(key=lambda d: d["score"], reverse=True)
        return detections[:max_results]
