"""
Stage 2: 뷰 렌더링

ViewDescriptor의 샘플링 사각형을 원본에서 잘라 정사각형 캔버스로 리사이즈하고
enhancement 레벨에 맞는 픽셀 필터를 적용합니다.

매 호출마다 새 PIL 이미지를 반환하므로 뷰 간 버퍼를 공유하지 않습니다.
"""

from typing import Optional

from PIL import Image

from roomscan.config import Config
from roomscan.contracts import EnhancementLevel, ViewDescriptor
from roomscan.utils.image_ops import ImageUtils


class RegionRenderer:
    """
    기본 뷰 렌더러 (Pillow + OpenCV)

    AI Logic Step 2: ViewDescriptor → 분류기 입력 이미지
    """

    def __init__(self, render_size: Optional[int] = None):
        """
        Args:
            render_size: 출력 캔버스 한 변 크기 (None이면 Config.RENDER_SIZE)
        """
        self.render_size = render_size or Config.RENDER_SIZE

    def render(self, image: Image.Image, view: ViewDescriptor) -> Image.Image:
        """
        Args:
            image: 원본 RGB 이미지 (변경되지 않음)
            view: 렌더링할 뷰

        Returns:
            render_size x render_size RGB 이미지
        """
        region = ImageUtils.crop_region(image, view.box, self.render_size)
        enhanced = ImageUtils.apply_enhancement(region, view.enhancement.value)

        if view.enhancement == EnhancementLevel.EDGE:
            sharpened = ImageUtils.sharpen_image(ImageUtils.pil_to_cv2(enhanced))
            enhanced = ImageUtils.cv2_to_pil(sharpened)

        return enhanced
