"""
Stage 1: 멀티뷰 계획

파노라마(equirectangular) 이미지는 프레임 가장자리로 갈수록 디테일이 압축되므로
전체 프레임 1회 탐지만으로는 가구가 과소 탐지됩니다.
겹치는 여러 뷰(전체, 중앙 크롭, 적응형 그리드, 엣지 강화)를 계획하고
뷰마다 신뢰도 가중치(fusion weight)를 부여합니다.
"""

from typing import List

from roomscan.contracts import EnhancementLevel, RoomType, ViewDescriptor
from roomscan.data.knowledge_base import get_grid_config


# 뷰별 가중치 및 분류기 결과 상한
FULL_VIEW_WEIGHT = 1.0
CENTER_VIEW_WEIGHT = 1.2
FOCUS_CELL_WEIGHT = 1.1
GRID_CELL_WEIGHT = 0.8
EDGE_VIEW_WEIGHT = 0.9

FULL_VIEW_MAX_RESULTS = 12
CENTER_VIEW_MAX_RESULTS = 10
GRID_VIEW_MAX_RESULTS = 6
EDGE_VIEW_MAX_RESULTS = 8

# 중앙 크롭 한 변 = 짧은 변 * CENTER_CROP_RATIO
CENTER_CROP_RATIO = 0.75


def is_center_section(col: int, row: int, total_cols: int, total_rows: int) -> bool:
    """그리드 중앙 셀 여부"""
    center_col = total_cols // 2
    center_row = total_rows // 2
    return abs(col - center_col) <= 0.5 and abs(row - center_row) <= 0.5


def is_focus_section(focus: str, col: int, row: int, total_cols: int, total_rows: int) -> bool:
    """
    그리드 셀이 룸 설정의 focus 영역에 속하는지 판단합니다.

    - center: 중앙 셀
    - lower: 마지막 행 (주방 조리대 영역)
    - vertical: 가중 셀 없음
    """
    if focus == "center":
        return is_center_section(col, row, total_cols, total_rows)
    if focus == "lower":
        return row >= total_rows - 1
    return False


class ViewPlanner:
    """
    멀티뷰 샘플링 계획기

    AI Logic Step 1: 이미지 크기 + 룸 유형 → 순서가 고정된 ViewDescriptor 목록

    뷰 순서:
        1. full            (medium, 1.0)
        2. center          (high, 1.2)
        3. grid_0..grid_N  (focus 셀 high/1.1, 나머지 medium/0.8)
        4. edge_enhanced   (edge, 0.9)
    """

    def plan(self, width: float, height: float, room_type: RoomType = RoomType.GENERAL) -> List[ViewDescriptor]:
        """
        Args:
            width: 원본 이미지 너비 (px)
            height: 원본 이미지 높이 (px)
            room_type: 룸 유형

        Returns:
            ViewDescriptor 리스트 (매 호출마다 새로 생성)
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid image size: {width}x{height}")

        views = [
            ViewDescriptor(
                source_tag="full",
                rect=(0, 0, width, height),
                enhancement=EnhancementLevel.MEDIUM,
                fusion_weight=FULL_VIEW_WEIGHT,
                max_results=FULL_VIEW_MAX_RESULTS
            ),
            self.center_view(width, height),
        ]
        views.extend(self.adaptive_grid(width, height, room_type))
        views.append(ViewDescriptor(
            source_tag="edge_enhanced",
            rect=(0, 0, width, height),
            enhancement=EnhancementLevel.EDGE,
            fusion_weight=EDGE_VIEW_WEIGHT,
            max_results=EDGE_VIEW_MAX_RESULTS
        ))
        return views

    def center_view(self, width: float, height: float) -> ViewDescriptor:
        """주 시야 영역 정사각형 크롭"""
        crop_size = min(width, height) * CENTER_CROP_RATIO
        crop_x = (width - crop_size) / 2
        crop_y = (height - crop_size) / 2
        return ViewDescriptor(
            source_tag="center",
            rect=(crop_x, crop_y, crop_size, crop_size),
            enhancement=EnhancementLevel.HIGH,
            fusion_weight=CENTER_VIEW_WEIGHT,
            max_results=CENTER_VIEW_MAX_RESULTS
        )

    def adaptive_grid(self, width: float, height: float, room_type: RoomType) -> List[ViewDescriptor]:
        """룸 유형별 (cols, rows, focus) 그리드 셀 뷰 (row-major)"""
        config = get_grid_config(room_type)
        cols, rows, focus = config["cols"], config["rows"], config["focus"]
        section_width = width / cols
        section_height = height / rows

        sections = []
        for row in range(rows):
            for col in range(cols):
                focused = is_focus_section(focus, col, row, cols, rows)
                sections.append(ViewDescriptor(
                    source_tag=f"grid_{len(sections)}",
                    rect=(col * section_width, row * section_height, section_width, section_height),
                    enhancement=EnhancementLevel.HIGH if focused else EnhancementLevel.MEDIUM,
                    fusion_weight=FOCUS_CELL_WEIGHT if focused else GRID_CELL_WEIGHT,
                    max_results=GRID_VIEW_MAX_RESULTS
                ))
        return sections
