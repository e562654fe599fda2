import os
from typing import Optional

import torch


class Config:
    # 단일 GPU 작업 시 기본 GPU ID
    DEFAULT_GPU_ID: int = 0

    @staticmethod
    def get_device(gpu_id: Optional[int] = None) -> str:
        """
        지정된 GPU ID에 대한 디바이스 문자열을 반환합니다.

        Args:
            gpu_id: GPU ID (None이면 DEFAULT_GPU_ID 사용)

        Returns:
            디바이스 문자열 (예: "cuda:0", "cuda:1", "cpu")
        """
        if not torch.cuda.is_available():
            return "cpu"

        if gpu_id is None:
            gpu_id = Config.DEFAULT_GPU_ID

        return f"cuda:{gpu_id}"

    # --- Models ---
    # COCO 80 클래스 YOLO 모델 (라벨명이 knowledge_base 테이블과 동일)
    YOLO_MODEL_PATH = os.environ.get("ROOMSCAN_YOLO_MODEL", "yolov8m.pt")

    # --- Rendering ---
    # 각 뷰는 정사각형 캔버스로 리사이즈된 뒤 분류기에 전달됨
    RENDER_SIZE: int = 1024

    # --- Detection Thresholds ---
    # 분류기 자체 컷오프는 낮게 잡고, 룸별 임계값으로 후처리 필터링
    CLASSIFIER_MIN_SCORE = 0.20

    # knowledge_base에 없는 라벨의 기본 임계값
    DEFAULT_THRESHOLD = 0.25

    # --- Concurrency ---
    # 1이면 뷰를 순차 처리 (렌더링 버퍼 공유 없이도 결과 순서는 동일)
    MAX_CONCURRENT_VIEWS: int = int(os.environ.get("ROOMSCAN_MAX_CONCURRENT_VIEWS", "1"))
