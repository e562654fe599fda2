"""
RoomScan Data Contracts

파이프라인 단계 간 주고받는 데이터 구조 정의.
뷰 계획 → 원시 탐지 → 클래스 누적 → 최종 추정치(ItemEstimate)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Tuple

from PIL import Image


class RoomType(str, Enum):
    """방 유형"""
    GENERAL = "general"
    KITCHEN = "kitchen"
    BATHROOM = "bathroom"
    TOILET = "toilet"
    BEDROOM = "bedroom"
    ENTRANCE = "entrance"


class EnhancementLevel(str, Enum):
    """뷰 렌더링 시 적용할 픽셀 필터 프로파일"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    EDGE = "edge"       # 샤프닝 + 고대비 + 저채도 (edge_enhanced 뷰 전용)


class QualityTier(str, Enum):
    """탐지 품질 등급"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ItemKind(str, Enum):
    """추정치 종류"""
    OBJECT = "object"                   # 분류기 탐지 기반
    ARCHITECTURAL = "architectural"     # 룸 사전확률 기반 (이미지 근거 아님)


@dataclass(frozen=True)
class ViewDescriptor:
    """분류기에 전달할 하나의 샘플링 뷰"""
    source_tag: str                          # "full", "center", "grid_0", "edge_enhanced"
    rect: Tuple[float, float, float, float]  # (x, y, width, height) 원본 이미지 좌표
    enhancement: EnhancementLevel
    fusion_weight: float
    max_results: int = 6

    @property
    def box(self) -> Tuple[float, float, float, float]:
        """(x1, y1, x2, y2) 형태의 크롭 박스"""
        x, y, w, h = self.rect
        return (x, y, x + w, y + h)


@dataclass
class RawDetection:
    """분류기 1회 호출에서 나온 원시 탐지 결과"""
    label: str
    raw_confidence: float
    source_tag: str
    fusion_weight: float = 1.0
    box: Optional[List[float]] = None

    @property
    def adjusted_confidence(self) -> float:
        return self.raw_confidence * self.fusion_weight


@dataclass
class ClassAccumulator:
    """라벨별 누적 통계 (analyze_room 1회 호출 범위)"""
    occurrence_count: int = 0
    confidences: List[int] = field(default_factory=list)
    max_confidence: int = 0
    # 뷰 계획 순서(최초 탐지 순)를 유지하는 순서 있는 집합
    source_tags: Dict[str, None] = field(default_factory=dict)

    def add(self, confidence_percent: int, source_tag: str):
        self.occurrence_count += 1
        self.confidences.append(confidence_percent)
        self.max_confidence = max(self.max_confidence, confidence_percent)
        self.source_tags.setdefault(source_tag, None)


@dataclass
class ItemEstimate:
    """라벨별 최종 추정치"""
    label: str
    estimated_count: int
    occurrence_count: int
    confidences: List[int] = field(default_factory=list)
    max_confidence: int = 0
    avg_confidence: int = 0
    quality: QualityTier = QualityTier.MEDIUM
    kind: ItemKind = ItemKind.OBJECT
    source_tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """
        UI가 소비하는 JSON 형태로 변환합니다.

        Output format:
        {
            "count": 2,
            "confidences": [72, 65],
            "maxConfidence": 72,
            "avgConfidence": 69,
            "detectionQuality": "medium",
            "sources": ["full", "grid_4"],
            "type": "architectural"     # 구조 요소일 때만
        }
        """
        data = {
            "count": self.estimated_count,
            "confidences": list(self.confidences),
            "maxConfidence": self.max_confidence,
            "avgConfidence": self.avg_confidence,
            "detectionQuality": self.quality.value,
            "sources": list(self.source_tags),
        }
        if self.kind == ItemKind.ARCHITECTURAL:
            data["type"] = self.kind.value
        return data


class VisualClassifier(Protocol):
    """
    외부 시각 분류기 인터페이스

    선택 속성 thread_safe=True 를 두면 파이프라인이 동기 detect()를
    여러 스레드에서 동시에 호출할 수 있습니다 (없으면 순차 처리).
    """

    @property
    def is_loaded(self) -> bool:
        ...

    def load(self) -> None:
        ...

    def detect(self, region: Image.Image, max_results: int) -> List[Dict[str, Any]]:
        """[{"label": str, "score": float, "box": [x1, y1, x2, y2]}, ...]"""
        ...


class ViewRenderer(Protocol):
    """뷰 → 픽셀 버퍼 렌더러 인터페이스"""

    def render(self, image: Image.Image, view: ViewDescriptor) -> Image.Image:
        ...
