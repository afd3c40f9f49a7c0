"""
边框扫描模块
"""

from .core import BorderOffsets, CropRectangle, scan, to_crop_rectangle

__all__ = [
    'BorderOffsets',
    'CropRectangle',
    'scan',
    'to_crop_rectangle',
]
