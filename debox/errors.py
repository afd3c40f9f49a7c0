"""
异常定义

所有异常都在边界处抛出并直接向上传递，不做重试
"""


class DeboxError(Exception):
    """debox 所有异常的基类"""


class InvalidDimensions(DeboxError, ValueError):
    """图像宽高非法，或边缘图尺寸与声明的宽高不一致"""


class EdgeDetectionFailure(DeboxError):
    """边缘检测失败（图片无法读取、格式损坏等）"""


class CropFailure(DeboxError):
    """裁切结果无法写出（目标路径不可写等）"""
