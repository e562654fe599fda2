# RoomScan Utils Module
from .image_ops import ImageUtils, ENHANCEMENT_PROFILES
from .math_ops import round_half_up, to_percent, mean_percent

__all__ = ['ImageUtils', 'ENHANCEMENT_PROFILES', 'round_half_up', 'to_percent', 'mean_percent']
