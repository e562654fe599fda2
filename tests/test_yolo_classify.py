"""
Tests for roomscan/processors/3_YOLO_classify.py

YoloClassifier 단위 테스트 (Mock 기반):
- 모델 로드 / 실패 처리
- 예측 결과 → {"label", "score", "box"} 변환
- max_results 상한
"""

import importlib
from unittest.mock import MagicMock, patch

import numpy as np
import pytest
from PIL import Image

from roomscan.exceptions import InitializationFailure
from roomscan.processors import YoloClassifier

# 숫자로 시작하는 모듈 import
_stage3 = importlib.import_module('.3_YOLO_classify', package='roomscan.processors')


class _Tensor:
    """result.boxes.xyxy.cpu().numpy() 체인 흉내"""

    def __init__(self, values):
        self._values = np.array(values)

    def cpu(self):
        return self

    def numpy(self):
        return self._values


def _make_model(boxes, scores, classes, names=None):
    result = MagicMock()
    result.boxes.__len__.return_value = len(scores)
    result.boxes.xyxy = _Tensor(boxes)
    result.boxes.conf = _Tensor(scores)
    result.boxes.cls = _Tensor(classes)

    model = MagicMock()
    model.names = names or {0: "person", 56: "chair", 59: "bed", 72: "refrigerator"}
    model.predict.return_value = [result]
    return model


@pytest.fixture
def loaded_classifier():
    model = _make_model(
        boxes=[[0, 0, 10, 10], [5, 5, 50, 50], [1, 1, 2, 2]],
        scores=[0.3, 0.9, 0.6],
        classes=[56, 59, 72]
    )
    classifier = YoloClassifier(model_path="test.pt", confidence_threshold=0.2)
    classifier.model = model
    return classifier


class TestYoloClassifierLoad:
    """load() 테스트"""

    def test_not_loaded_initially(self):
        classifier = YoloClassifier(model_path="test.pt")
        assert classifier.is_loaded is False
        assert classifier.model_path == "test.pt"

    def test_load_success(self):
        mock_yolo = MagicMock(return_value=_make_model([], [], []))
        with patch.object(_stage3, 'HAS_YOLO', True), \
             patch.object(_stage3, 'YOLO', mock_yolo, create=True):
            classifier = YoloClassifier(model_path="test.pt")
            classifier.load()

        assert classifier.is_loaded
        mock_yolo.assert_called_once_with("test.pt")

    def test_load_is_idempotent(self):
        mock_yolo = MagicMock(return_value=_make_model([], [], []))
        with patch.object(_stage3, 'HAS_YOLO', True), \
             patch.object(_stage3, 'YOLO', mock_yolo, create=True):
            classifier = YoloClassifier(model_path="test.pt")
            classifier.load()
            classifier.load()

        assert mock_yolo.call_count == 1

    def test_load_without_ultralytics(self):
        with patch.object(_stage3, 'HAS_YOLO', False):
            with pytest.raises(InitializationFailure):
                YoloClassifier(model_path="test.pt").load()

    def test_load_weights_error(self):
        mock_yolo = MagicMock(side_effect=FileNotFoundError("missing.pt"))
        with patch.object(_stage3, 'HAS_YOLO', True), \
             patch.object(_stage3, 'YOLO', mock_yolo, create=True):
            classifier = YoloClassifier(model_path="missing.pt")
            with pytest.raises(InitializationFailure) as exc_info:
                classifier.load()

        assert "missing.pt" in str(exc_info.value)
        assert classifier.is_loaded is False


class TestYoloClassifierDetect:
    """detect() 테스트"""

    def test_detect_before_load_raises(self):
        with pytest.raises(RuntimeError):
            YoloClassifier(model_path="test.pt").detect(Image.new('RGB', (8, 8)), 5)

    def test_detect_converts_predictions(self, loaded_classifier):
        detections = loaded_classifier.detect(Image.new('RGB', (64, 64)), 6)

        assert [d["label"] for d in detections] == ["bed", "refrigerator", "chair"]
        assert detections[0]["score"] == pytest.approx(0.9)
        assert detections[0]["box"] == [5, 5, 50, 50]
        assert isinstance(detections[0]["score"], float)

    def test_detect_respects_max_results(self, loaded_classifier):
        detections = loaded_classifier.detect(Image.new('RGB', (64, 64)), 2)

        assert len(detections) == 2
        kwargs = loaded_classifier.model.predict.call_args.kwargs
        assert kwargs["max_det"] == 2
        assert kwargs["conf"] == 0.2

    def test_detect_empty(self):
        classifier = YoloClassifier(model_path="test.pt")
        classifier.model = _make_model([], [], [])
        assert classifier.detect(Image.new('RGB', (8, 8)), 6) == []
