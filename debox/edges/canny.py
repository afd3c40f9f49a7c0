"""
边缘检测模块

使用 OpenCV 的 Canny 算子生成布尔边缘图：
- 转灰度
- 高斯模糊（半径 + sigma）
- Canny（高低阈值按 8 位灰度范围的百分比给出）
"""
import logging
import os
from typing import Dict, Optional, Tuple

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from debox.config import merge_params
from debox.errors import EdgeDetectionFailure
from debox.utils.path import ensure_dir

logger = logging.getLogger(__name__)


def _to_gray_u8(image: np.ndarray) -> np.ndarray:
    """转换为 8 位灰度图"""
    if image.ndim == 3:
        channels = image.shape[2]
        if channels == 4:
            image = cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
        elif channels == 3:
            image = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
        elif channels == 1:
            image = image[:, :, 0]
        else:
            raise EdgeDetectionFailure(f"不支持的通道数: {channels}")
    elif image.ndim != 2:
        raise EdgeDetectionFailure(f"不支持的图像维度: {image.ndim}")

    if image.dtype != np.uint8:
        image = cv2.normalize(image, None, 0, 255, cv2.NORM_MINMAX).astype(np.uint8)

    return image


def detect_edges(image: np.ndarray, params: Optional[Dict] = None) -> np.ndarray:
    """
    对图像做 Canny 边缘检测

    Args:
        image: OpenCV 图像数组（灰度、BGR 或 BGRA）
        params: Canny 参数（radius, sigma, low_percent, high_percent），缺省使用配置

    Returns:
        形状为 (height, width) 的布尔数组，True 表示边缘像素

    Raises:
        EdgeDetectionFailure: 图像无效或 OpenCV 处理失败
    """
    if image is None or image.size == 0:
        raise EdgeDetectionFailure("输入图像为空")

    cfg = merge_params(params)
    ksize = 2 * int(cfg['radius']) + 1
    low = float(cfg['low_percent']) / 100.0 * 255.0
    high = float(cfg['high_percent']) / 100.0 * 255.0

    try:
        gray = _to_gray_u8(image)
        blurred = cv2.GaussianBlur(gray, (ksize, ksize), sigmaX=float(cfg['sigma']))
        edges = cv2.Canny(blurred, low, high)
    except cv2.error as e:
        raise EdgeDetectionFailure(f"Canny 边缘检测失败: {e}") from e

    logger.debug("Canny %sx%s+%s%%+%s%%: %d 个边缘像素",
                 cfg['radius'], cfg['sigma'], cfg['low_percent'], cfg['high_percent'],
                 int(np.count_nonzero(edges)))

    return edges > 0


def read_image(image_path: str) -> np.ndarray:
    """读取图片，失败时抛出 EdgeDetectionFailure"""
    if not os.path.isfile(image_path):
        raise EdgeDetectionFailure(f"图片不存在: {image_path}")

    img = cv2.imread(image_path, cv2.IMREAD_UNCHANGED)
    if img is None:
        raise EdgeDetectionFailure(f"无法读取图片: {image_path}")

    return img


def image_size(image_path: str) -> Tuple[int, int]:
    """
    只读取文件头获取图片尺寸

    Returns:
        (width, height)
    """
    try:
        with Image.open(image_path) as img:
            return img.size
    except (FileNotFoundError, UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise EdgeDetectionFailure(f"无法读取图片尺寸: {image_path} - {e}") from e


def load_edge_grid(image_path: str, params: Optional[Dict] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    读取图片并生成边缘图

    Returns:
        (原图数组, 布尔边缘图)
    """
    img = read_image(image_path)
    return img, detect_edges(img, params)


def save_edge_map(edge_grid: np.ndarray, output_path: str) -> str:
    """将边缘图保存为黑白图片（边缘为白色），便于检查"""
    try:
        ensure_dir(os.path.dirname(output_path) or '.')
        ok = cv2.imwrite(output_path, np.where(edge_grid, 255, 0).astype(np.uint8))
    except (cv2.error, OSError) as e:
        raise EdgeDetectionFailure(f"无法写出边缘图: {output_path} - {e}") from e

    if not ok:
        raise EdgeDetectionFailure(f"无法写出边缘图: {output_path}")
    return output_path
