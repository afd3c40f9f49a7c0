"""
裁切模块

按 CropRectangle 裁切图像并保存。矩形由扫描模块保证在图像范围内，这里不再重复校验。
"""
import logging
import os

import cv2
import numpy as np

from debox.errors import CropFailure
from debox.scan import CropRectangle
from debox.utils.path import ensure_dir

logger = logging.getLogger(__name__)


def crop_image(image: np.ndarray, rect: CropRectangle) -> np.ndarray:
    """
    裁切图像数组

    空矩形（宽或高为 0）表示无需裁切，直接返回原图
    """
    if rect.is_empty:
        return image

    y0 = rect.row_offset
    x0 = rect.col_offset
    return image[y0:y0 + rect.height, x0:x0 + rect.width]


def save_image(image: np.ndarray, output_path: str) -> str:
    """保存图像，失败时抛出 CropFailure"""
    out_dir = os.path.dirname(output_path)
    try:
        if out_dir:
            ensure_dir(out_dir)
        ok = cv2.imwrite(output_path, image)
    except (cv2.error, OSError) as e:
        raise CropFailure(f"无法写出图片: {output_path} - {e}") from e

    if not ok:
        raise CropFailure(f"无法写出图片: {output_path}")

    return output_path


def crop_file(image: np.ndarray, rect: CropRectangle, output_path: str) -> np.ndarray:
    """
    裁切并保存

    Args:
        image: 原图数组
        rect: 裁切矩形
        output_path: 输出路径

    Returns:
        裁切后的图像数组
    """
    cropped = crop_image(image, rect)
    save_image(cropped, output_path)
    logger.debug("已保存 %s (%s)", output_path, rect.geometry())
    return cropped
