"""
debox - 基于边缘检测的 letterbox / pillarbox 黑边去除
"""

from debox.errors import CropFailure, DeboxError, EdgeDetectionFailure, InvalidDimensions
from debox.scan import BorderOffsets, CropRectangle, scan, to_crop_rectangle

__version__ = '0.1.0'

__all__ = [
    'BorderOffsets',
    'CropRectangle',
    'CropFailure',
    'DeboxError',
    'EdgeDetectionFailure',
    'InvalidDimensions',
    'scan',
    'to_crop_rectangle',
]
