"""
Tests for roomscan/processors/4_detection_fusion.py

DetectionFusionEngine 단위 테스트:
- 뷰 가중치 적용
- 룸별 임계값
- 문맥 필터 / person 필터
- 라벨별 누적 통계
"""

import pytest

from roomscan.contracts import EnhancementLevel, RawDetection, RoomType, ViewDescriptor
from roomscan.processors import DetectionFusionEngine, to_raw_detections


def _det(label, score, tag="full", weight=1.0):
    return RawDetection(label=label, raw_confidence=score, source_tag=tag, fusion_weight=weight)


class TestToRawDetections:
    """분류기 출력 → RawDetection 변환"""

    def test_attaches_view_tag_and_weight(self):
        view = ViewDescriptor("grid_4", (0, 0, 10, 10), EnhancementLevel.HIGH, 1.1)
        detections = to_raw_detections(
            [{"label": "chair", "score": 0.5, "box": [0, 0, 5, 5]}], view
        )

        assert len(detections) == 1
        assert detections[0].source_tag == "grid_4"
        assert detections[0].fusion_weight == 1.1
        assert detections[0].box == [0, 0, 5, 5]
        assert detections[0].adjusted_confidence == pytest.approx(0.55)

    def test_box_is_optional(self):
        view = ViewDescriptor("full", (0, 0, 10, 10), EnhancementLevel.MEDIUM, 1.0, 12)
        assert to_raw_detections([{"label": "tv", "score": 0.9}], view)[0].box is None


class TestThresholdFilter:
    """룸별 임계값 필터 테스트"""

    def test_weight_lifts_detection_over_threshold(self):
        """0.3 * 1.2 = 0.36 >= couch 0.35"""
        engine = DetectionFusionEngine(RoomType.GENERAL)
        assert engine.accept(_det("couch", 0.3, "center", 1.2))
        assert not engine.accept(_det("couch", 0.3, "full", 1.0))

    def test_weight_drops_detection_under_threshold(self):
        """0.3 * 0.8 = 0.24 < chair 0.25"""
        engine = DetectionFusionEngine(RoomType.GENERAL)
        assert not engine.accept(_det("chair", 0.3, "grid_0", 0.8))

    def test_room_override_applies(self):
        assert DetectionFusionEngine(RoomType.KITCHEN).accept(_det("refrigerator", 0.3))
        assert not DetectionFusionEngine(RoomType.GENERAL).accept(_det("refrigerator", 0.3))

    def test_unknown_label_uses_default_threshold(self):
        engine = DetectionFusionEngine(RoomType.GENERAL)
        assert engine.threshold_for("umbrella") == 0.25
        assert engine.accept(_det("umbrella", 0.3))
        assert not engine.accept(_det("umbrella", 0.2))


class TestContextFilter:
    """문맥 필터 테스트"""

    def test_unlikely_object_needs_boosted_confidence(self):
        """kitchen의 bed는 0.4 + 0.2 이상이어야 통과"""
        engine = DetectionFusionEngine(RoomType.KITCHEN)
        assert engine.should_filter("bed", 0.5)
        assert not engine.should_filter("bed", 0.7)

    def test_toilet_boost_is_higher(self):
        engine = DetectionFusionEngine(RoomType.TOILET)
        assert engine.should_filter("tv", 0.65)
        assert not engine.should_filter("tv", 0.75)

    def test_likely_object_not_filtered(self):
        engine = DetectionFusionEngine(RoomType.KITCHEN)
        assert not engine.should_filter("refrigerator", 0.26)

    def test_low_confidence_person_filtered(self):
        engine = DetectionFusionEngine(RoomType.GENERAL)
        assert engine.should_filter("person", 0.45)
        assert not engine.should_filter("person", 0.55)

    def test_no_context_filter_for_general(self):
        engine = DetectionFusionEngine(RoomType.GENERAL)
        assert engine.context_filter is None
        assert not engine.should_filter("bed", 0.36)

    def test_unlikely_filtered_in_fuse(self):
        engine = DetectionFusionEngine(RoomType.KITCHEN)
        result = engine.fuse([_det("bed", 0.5), _det("bed", 0.75, "center", 1.2)])

        assert result["bed"].occurrence_count == 1
        assert list(result["bed"].source_tags) == ["center"]


class TestFuse:
    """누적 통계 테스트"""

    def test_refrigerator_in_kitchen(self):
        """
        full 0.30 (x1.0) → 30%, grid_3 0.50 (x1.1) → 55%
        """
        engine = DetectionFusionEngine(RoomType.KITCHEN)
        result = engine.fuse([
            _det("refrigerator", 0.30, "full", 1.0),
            _det("refrigerator", 0.50, "grid_3", 1.1),
        ])

        acc = result["refrigerator"]
        assert acc.occurrence_count == 2
        assert acc.confidences == [30, 55]
        assert acc.max_confidence == 55
        assert list(acc.source_tags) == ["full", "grid_3"]

    def test_same_view_counted_once_in_sources(self):
        engine = DetectionFusionEngine(RoomType.GENERAL)
        result = engine.fuse([_det("chair", 0.6), _det("chair", 0.5)])

        assert result["chair"].occurrence_count == 2
        assert list(result["chair"].source_tags) == ["full"]

    def test_rejected_labels_absent(self):
        engine = DetectionFusionEngine(RoomType.GENERAL)
        result = engine.fuse([_det("person", 0.3), _det("tv", 0.9)])
        assert set(result) == {"tv"}

    def test_empty_input(self):
        assert DetectionFusionEngine(RoomType.GENERAL).fuse([]) == {}

    def test_engine_reusable(self):
        """fuse() 호출 간 누적 상태 공유 없음"""
        engine = DetectionFusionEngine(RoomType.GENERAL)
        engine.fuse([_det("tv", 0.9)])
        assert engine.fuse([_det("tv", 0.8)])["tv"].confidences == [80]

    def test_sources_keep_view_order(self):
        """출처 태그는 정렬하지 않고 최초 탐지 순서 유지"""
        engine = DetectionFusionEngine(RoomType.GENERAL)
        result = engine.fuse([
            _det("tv", 0.9, "full"),
            _det("tv", 0.9, "grid_4", 1.1),
            _det("tv", 0.9, "edge_enhanced", 0.9),
            _det("tv", 0.9, "full"),
        ])
        assert list(result["tv"].source_tags) == ["full", "grid_4", "edge_enhanced"]


class TestConfidenceCap:
    """가중치 적용 후 100% 상한"""

    def test_center_weight_capped_at_100(self):
        """0.95 * 1.2 = 1.14 → 100%"""
        engine = DetectionFusionEngine(RoomType.GENERAL)
        acc = engine.fuse([_det("tv", 0.95, "center", 1.2)])["tv"]

        assert acc.confidences == [100]
        assert acc.max_confidence == 100

    def test_focus_cell_capped_at_100(self):
        engine = DetectionFusionEngine(RoomType.KITCHEN)
        acc = engine.fuse([
            _det("refrigerator", 0.99, "grid_3", 1.1),
            _det("refrigerator", 0.80, "full", 1.0),
        ])["refrigerator"]

        assert acc.confidences == [100, 80]
        assert all(0 <= c <= 100 for c in acc.confidences)

    def test_threshold_uses_weighted_score(self):
        """상한은 저장값에만 적용, 임계값 비교는 가중치 적용값 그대로"""
        engine = DetectionFusionEngine(RoomType.TOILET)
        # tv는 toilet에서 unlikely: 0.4 + 0.3 이상 필요, 0.65 * 1.2 = 0.78
        acc = engine.fuse([_det("tv", 0.65, "center", 1.2)])["tv"]
        assert acc.confidences == [78]
