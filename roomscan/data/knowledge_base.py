"""
Room Knowledge Base

룸 유형별 탐지 임계값, 문맥 필터, 중복 제거 전략, 구조 요소 사전확률,
룸 기대치를 저장하는 정적 DB

모든 테이블은 모듈 로드 시 한 번 생성되는 읽기 전용 매핑(MappingProxyType)이며
분석 호출마다 재계산하거나 수정하지 않습니다.
"""

from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from roomscan.contracts import RoomType


def _freeze(value: Any) -> Any:
    """dict → MappingProxyType, list → tuple, set → frozenset (재귀)"""
    if isinstance(value, dict):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, set):
        return frozenset(value)
    return value


# =============================================================================
# Object Categories (지원 객체 카탈로그)
# =============================================================================

OBJECT_CATEGORIES = _freeze({
    "furniture": {
        "chair": {"threshold": 0.25, "priority": "high"},
        "couch": {"threshold": 0.35, "priority": "high"},
        "bed": {"threshold": 0.35, "priority": "high"},
        "dining table": {"threshold": 0.25, "priority": "high"},
        "desk": {"threshold": 0.25, "priority": "medium"},
    },
    "electronics": {
        "tv": {"threshold": 0.35, "priority": "high"},
        "laptop": {"threshold": 0.25, "priority": "medium"},
        "cell phone": {"threshold": 0.4, "priority": "low"},
        "keyboard": {"threshold": 0.25, "priority": "medium"},
        "mouse": {"threshold": 0.2, "priority": "low"},
        "remote": {"threshold": 0.2, "priority": "low"},
    },
    "kitchen": {
        "refrigerator": {"threshold": 0.35, "priority": "high"},
        "microwave": {"threshold": 0.25, "priority": "medium"},
        "oven": {"threshold": 0.3, "priority": "high"},
        "sink": {"threshold": 0.25, "priority": "high"},
        "toaster": {"threshold": 0.25, "priority": "medium"},
    },
    "bathroom": {
        "toilet": {"threshold": 0.4, "priority": "high"},
        "sink": {"threshold": 0.25, "priority": "high"},
    },
    "decorative": {
        "potted plant": {"threshold": 0.25, "priority": "medium"},
        "vase": {"threshold": 0.2, "priority": "low"},
        "clock": {"threshold": 0.25, "priority": "medium"},
        "book": {"threshold": 0.2, "priority": "low"},
    },
})


# =============================================================================
# Detection Thresholds
# =============================================================================

BASE_THRESHOLDS = _freeze({
    # 고신뢰 객체
    "chair": 0.25, "couch": 0.35, "bed": 0.35, "dining table": 0.25,
    "tv": 0.35, "laptop": 0.25, "refrigerator": 0.35, "toilet": 0.4,

    # 중간 신뢰 객체
    "microwave": 0.25, "oven": 0.3, "sink": 0.25, "potted plant": 0.25,
    "clock": 0.25, "keyboard": 0.25, "desk": 0.25,

    # 오탐이 잦은 객체
    "person": 0.6, "cell phone": 0.4, "book": 0.3, "cup": 0.35,
    "mouse": 0.3, "remote": 0.3, "vase": 0.25,
})

ROOM_THRESHOLD_OVERRIDES = _freeze({
    RoomType.KITCHEN: {
        "refrigerator": 0.25, "microwave": 0.2, "oven": 0.25, "sink": 0.2,
        "dining table": 0.2, "chair": 0.2,
    },
    RoomType.BATHROOM: {"toilet": 0.3, "sink": 0.2, "person": 0.7},
    RoomType.TOILET: {"toilet": 0.25, "sink": 0.2, "person": 0.8},
    RoomType.BEDROOM: {"bed": 0.25, "chair": 0.2, "desk": 0.2, "laptop": 0.2},
    RoomType.ENTRANCE: {"chair": 0.3, "person": 0.5},
})


# =============================================================================
# Context Filters (룸에 어울리지 않는 객체)
# =============================================================================

# unlikely 라벨은 adjusted >= CONTEXT_BASE_CONFIDENCE + threshold_boost 일 때만 통과
CONTEXT_BASE_CONFIDENCE = 0.4

CONTEXT_FILTERS = _freeze({
    RoomType.TOILET: {
        "unlikely": {"bed", "couch", "dining table", "tv", "laptop"},
        "threshold_boost": 0.3,
    },
    RoomType.KITCHEN: {
        "unlikely": {"bed", "toilet"},
        "threshold_boost": 0.2,
    },
    RoomType.BEDROOM: {
        "unlikely": {"toilet", "refrigerator", "oven", "microwave"},
        "threshold_boost": 0.2,
    },
    RoomType.BATHROOM: {
        "unlikely": {"bed", "couch", "dining table", "tv"},
        "threshold_boost": 0.3,
    },
})

# 그림자/가구가 사람으로 오인되는 경우가 많음
PERSON_MIN_CONFIDENCE = 0.5


# =============================================================================
# Deduplication Strategies
# =============================================================================

DEDUP_STRATEGIES = _freeze({
    # 여러 각도에서 같은 물체가 중복 탐지되기 쉬움
    "aggressive": {"person", "cell phone", "book", "cup", "mouse"},
    # 실제로 여러 개일 수도, 중복일 수도 있음
    "moderate": {"chair", "cabinet", "potted plant", "clock"},
    # 대형 단일 설비 - 중복이면 거의 확실히 같은 물체
    "conservative": {"bed", "couch", "refrigerator", "tv", "toilet", "sink"},
})

ROOM_COUNT_MULTIPLIERS = _freeze({
    RoomType.KITCHEN: {"chair": 1.5, "cabinet": 2},
    RoomType.BEDROOM: {"chair": 1.2},
    RoomType.ENTRANCE: {"chair": 0.8},
})


# =============================================================================
# Architectural Features (룸별 구조 요소 사전확률)
# =============================================================================

ARCHITECTURAL_FEATURES = _freeze({
    RoomType.GENERAL: {
        "door": {"probability": 0.95, "typical_count": [1, 2]},
        "window": {"probability": 0.8, "typical_count": [1, 3]},
    },
    RoomType.KITCHEN: {
        "door": {"probability": 0.9, "typical_count": [1, 2]},
        "window": {"probability": 0.7, "typical_count": [1, 2]},
        "cabinet": {"probability": 0.85, "typical_count": [3, 8]},
    },
    RoomType.BATHROOM: {
        "door": {"probability": 0.95, "typical_count": [1]},
        "window": {"probability": 0.4, "typical_count": [0, 1]},
        "cabinet": {"probability": 0.6, "typical_count": [1, 3]},
    },
    RoomType.TOILET: {
        "door": {"probability": 0.95, "typical_count": [1]},
        "window": {"probability": 0.3, "typical_count": [0, 1]},
        "cabinet": {"probability": 0.4, "typical_count": [0, 2]},
    },
    RoomType.BEDROOM: {
        "door": {"probability": 0.9, "typical_count": [1, 2]},
        "window": {"probability": 0.85, "typical_count": [1, 3]},
        "closet": {"probability": 0.7, "typical_count": [1, 2]},
    },
    RoomType.ENTRANCE: {
        "door": {"probability": 0.98, "typical_count": [1, 3]},
        "window": {"probability": 0.5, "typical_count": [0, 2]},
    },
})

# 합성 신뢰도 범위 (%)
ARCHITECTURAL_CONFIDENCE_RANGE = (60, 85)


# =============================================================================
# Room Expectations
# =============================================================================

ROOM_EXPECTATIONS = _freeze({
    RoomType.KITCHEN: {
        "should_have": ["refrigerator", "sink"],
        "might_have": ["microwave", "oven", "dining table", "chair"],
        "unlikely": ["bed", "toilet"],
    },
    RoomType.BATHROOM: {
        "should_have": ["sink"],
        "might_have": ["toilet", "cabinet"],
        "unlikely": ["bed", "couch", "tv"],
    },
    RoomType.TOILET: {
        "should_have": ["toilet"],
        "might_have": ["sink"],
        "unlikely": ["bed", "couch", "tv", "refrigerator"],
    },
    RoomType.BEDROOM: {
        "should_have": ["bed"],
        "might_have": ["chair", "desk", "closet"],
        "unlikely": ["toilet", "refrigerator", "oven"],
    },
})

EXPECTED_CONFIDENCE_BOOST = 10
CONFIDENCE_CAP = 95
UNLIKELY_REMOVAL_CONFIDENCE = 70


# =============================================================================
# Adaptive Grid
# =============================================================================

GRID_CONFIGS = _freeze({
    RoomType.KITCHEN: {"cols": 3, "rows": 2, "focus": "lower"},      # 조리대 영역
    RoomType.BATHROOM: {"cols": 2, "rows": 2, "focus": "center"},
    RoomType.BEDROOM: {"cols": 3, "rows": 2, "focus": "center"},
    RoomType.ENTRANCE: {"cols": 2, "rows": 3, "focus": "vertical"},
    RoomType.GENERAL: {"cols": 3, "rows": 2, "focus": "center"},
})


# =============================================================================
# Room Name Lookup
# =============================================================================

ROOM_NAME_MAP = _freeze({
    "kitchen": RoomType.KITCHEN,
    "toilet": RoomType.TOILET,
    "washroom": RoomType.BATHROOM,
    "room1": RoomType.BEDROOM,
    "room2": RoomType.BEDROOM,
    "entrance": RoomType.ENTRANCE,
    # 정식 유형명도 그대로 허용
    "general": RoomType.GENERAL,
    "bathroom": RoomType.BATHROOM,
    "bedroom": RoomType.BEDROOM,
})


# =============================================================================
# Lookup Functions
# =============================================================================

def get_room_type_from_name(room_name: Optional[str]) -> RoomType:
    """
    룸 이름에서 RoomType을 결정합니다.

    Args:
        room_name: UI에서 전달된 룸 이름 (예: "washroom", "room1")

    Returns:
        RoomType (알 수 없는 이름은 GENERAL)
    """
    if not room_name:
        return RoomType.GENERAL
    return ROOM_NAME_MAP.get(room_name.strip().lower(), RoomType.GENERAL)


def get_room_thresholds(room_type: RoomType) -> Dict[str, float]:
    """
    룸별 임계값 테이블 (기본 테이블 + 룸 오버라이드)

    Returns:
        {"chair": 0.2, "refrigerator": 0.25, ...}
    """
    thresholds = dict(BASE_THRESHOLDS)
    thresholds.update(ROOM_THRESHOLD_OVERRIDES.get(room_type, {}))
    return thresholds


def get_context_filter(room_type: RoomType) -> Optional[Mapping[str, Any]]:
    return CONTEXT_FILTERS.get(room_type)


def get_dedup_strategy(label: str) -> Optional[str]:
    """
    라벨의 중복 제거 전략을 반환합니다.

    Returns:
        "aggressive" | "moderate" | "conservative" | None
    """
    for strategy, labels in DEDUP_STRATEGIES.items():
        if label in labels:
            return strategy
    return None


def get_room_multiplier(label: str, room_type: RoomType) -> float:
    return ROOM_COUNT_MULTIPLIERS.get(room_type, {}).get(label, 1)


def get_architectural_features(room_type: RoomType) -> Mapping[str, Mapping[str, Any]]:
    """룸의 구조 요소 사전확률 (정의 없으면 GENERAL)"""
    return ARCHITECTURAL_FEATURES.get(room_type) or ARCHITECTURAL_FEATURES[RoomType.GENERAL]


def get_typical_count_range(feature: Mapping[str, Any]) -> Tuple[int, int]:
    """typical_count [min] 또는 [min, max] → (min, max)"""
    typical = feature["typical_count"]
    min_count = typical[0]
    max_count = typical[1] if len(typical) > 1 else min_count
    return min_count, max_count


def get_room_expectations(room_type: RoomType) -> Optional[Mapping[str, Tuple[str, ...]]]:
    return ROOM_EXPECTATIONS.get(room_type)


def get_grid_config(room_type: RoomType) -> Mapping[str, Any]:
    return GRID_CONFIGS.get(room_type) or GRID_CONFIGS[RoomType.GENERAL]


def get_all_supported_objects() -> Dict[str, Dict]:
    """
    모든 카테고리의 지원 객체를 하나의 딕셔너리로 합칩니다.

    Returns:
        {"chair": {"threshold": 0.25, "priority": "high"}, ...}
    """
    all_objects = {}
    for category in OBJECT_CATEGORIES.values():
        for label, info in category.items():
            all_objects[label] = dict(info)
    return all_objects


def get_supported_room_types() -> List[str]:
    return [room_type.value for room_type in ARCHITECTURAL_FEATURES.keys()]
