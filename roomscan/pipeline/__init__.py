"""
Room Analysis Pipeline

멀티뷰 탐지 융합 → 중복 제거 → 구조 요소 추정 → 룸 기대치 검증
"""

from .room_pipeline import RoomAnalysisPipeline

__all__ = [
    'RoomAnalysisPipeline'
]
