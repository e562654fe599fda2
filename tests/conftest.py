"""
pytest configuration and shared fakes

분류기/렌더러는 외부 협력자이므로 결정적인 fake로 대체합니다.
"""
import random
from typing import Dict, List, Optional

import pytest
from PIL import Image

from roomscan.contracts import ViewDescriptor


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "asyncio: marks tests as async")


class FakeRenderer:
    """뷰 태그를 기록하고 작은 단색 이미지를 반환"""

    def __init__(self):
        self.rendered: List[str] = []

    def render(self, image: Image.Image, view: ViewDescriptor) -> Image.Image:
        self.rendered.append(view.source_tag)
        region = Image.new("RGB", (8, 8), color="white")
        region.info["source_tag"] = view.source_tag
        return region


class FakeClassifier:
    """
    뷰 태그별로 미리 정한 예측을 반환하는 분류기

    Args:
        script: {source_tag: [{"label": str, "score": float}, ...]}
        fail_on: 이 태그의 뷰에서 RuntimeError 발생
        fail_load: load() 시 예외 발생
    """

    # 스크립트 조회 + 호출 기록만 하므로 동시 호출 허용
    thread_safe = True

    def __init__(
        self,
        script: Optional[Dict[str, List[Dict]]] = None,
        fail_on: Optional[str] = None,
        fail_load: bool = False
    ):
        self.script = script or {}
        self.fail_on = fail_on
        self.fail_load = fail_load
        self.loaded = False
        self.calls: List[str] = []

    @property
    def is_loaded(self) -> bool:
        return self.loaded

    def load(self):
        if self.fail_load:
            raise RuntimeError("weights not found")
        self.loaded = True

    def detect(self, region: Image.Image, max_results: int) -> List[Dict]:
        tag = region.info["source_tag"]
        self.calls.append(tag)
        if tag == self.fail_on:
            raise RuntimeError(f"classifier crashed on {tag}")
        return [dict(p) for p in self.script.get(tag, [])]


@pytest.fixture
def fake_renderer():
    return FakeRenderer()


@pytest.fixture
def sample_image():
    """2:1 파노라마 비율 테스트 이미지"""
    return Image.new("RGB", (400, 200), color=(120, 110, 100))


@pytest.fixture
def seeded_rng():
    return random.Random(1234)


@pytest.fixture
def make_classifier():
    """FakeClassifier 팩토리"""
    return FakeClassifier
