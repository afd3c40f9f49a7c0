"""
裁切模块
"""

from .core import crop_file, crop_image, save_image

__all__ = ['crop_file', 'crop_image', 'save_image']
