import cv2
import numpy as np
from PIL import Image, ImageEnhance, ImageOps

# (contrast, brightness, saturation) - 뷰 enhancement 레벨별 필터 프로파일
ENHANCEMENT_PROFILES = {
    "low": (1.1, 1.05, 1.05),
    "medium": (1.2, 1.1, 1.1),
    "high": (1.3, 1.15, 1.2),
    "edge": (1.5, 1.0, 0.8),
}


class ImageUtils:
    @staticmethod
    def load_image(image_path):
        try:
            original_pil = Image.open(image_path)
            original_pil = ImageOps.exif_transpose(original_pil)
            return original_pil.convert("RGB")
        except Exception as e:
            raise ValueError(f"Image Load Error: {e}")

    @staticmethod
    def to_pil(image):
        """PIL 이미지, RGB numpy 배열, 파일 경로를 RGB PIL 이미지로 통일"""
        if isinstance(image, Image.Image):
            return image if image.mode == "RGB" else image.convert("RGB")
        if isinstance(image, np.ndarray):
            return Image.fromarray(image.astype(np.uint8)).convert("RGB")
        return ImageUtils.load_image(image)

    @staticmethod
    def pil_to_cv2(pil_image):
        return cv2.cvtColor(np.array(pil_image), cv2.COLOR_RGB2BGR)

    @staticmethod
    def cv2_to_pil(cv2_image):
        return Image.fromarray(cv2.cvtColor(cv2_image, cv2.COLOR_BGR2RGB))

    @staticmethod
    def crop_region(pil_image, box, size):
        """
        원본 좌표 (x1, y1, x2, y2) 영역을 잘라 size x size 캔버스로 리사이즈
        """
        x1, y1, x2, y2 = box
        crop = pil_image.crop((int(round(x1)), int(round(y1)), int(round(x2)), int(round(y2))))
        return crop.resize((size, size), Image.BILINEAR)

    @staticmethod
    def apply_enhancement(pil_image, level):
        """
        대비/밝기/채도 필터 적용 (원본은 변경하지 않음)
        """
        contrast, brightness, saturation = ENHANCEMENT_PROFILES.get(level, ENHANCEMENT_PROFILES["medium"])
        enhanced = ImageEnhance.Contrast(pil_image).enhance(contrast)
        enhanced = ImageEnhance.Brightness(enhanced).enhance(brightness)
        return ImageEnhance.Color(enhanced).enhance(saturation)

    @staticmethod
    def sharpen_image(cv2_image):
        """이미지 윤곽선 강화"""
        kernel = np.array([[0, -1, 0],
                           [-1, 5, -1],
                           [0, -1, 0]])
        return cv2.filter2D(cv2_image, -1, kernel)
