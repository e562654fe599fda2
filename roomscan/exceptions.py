"""
RoomScan 예외 정의

- NotInitializedError: initialize() 성공 전에 분석 요청
- InitializationFailure: 분류기 모델 로드 실패
- ClassifierFailure: 뷰 렌더링/분류 중 외부 분류기 오류
"""


class RoomScanError(Exception):
    """RoomScan 기본 예외"""


class NotInitializedError(RoomScanError):
    """분류기가 초기화되지 않은 상태에서 analyze_room 호출"""

    def __init__(self, message: str = "Model not initialized"):
        super().__init__(message)


class InitializationFailure(RoomScanError):
    """분류기 모델 로드 실패"""


class ClassifierFailure(RoomScanError):
    """
    특정 뷰에서 분류기 호출 실패

    Attributes:
        source_tag: 실패한 뷰의 태그 (예: "grid_3")
    """

    def __init__(self, source_tag: str, cause: Exception):
        super().__init__(f"Classifier failed on view '{source_tag}': {cause}")
        self.source_tag = source_tag
        self.cause = cause
