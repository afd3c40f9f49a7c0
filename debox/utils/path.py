"""
路径工具函数
"""
import os
from pathlib import Path


def ensure_dir(path):
    """确保目录存在，不存在则创建"""
    os.makedirs(path, exist_ok=True)


def get_output_path(input_path, output_dir, suffix='', ext=None):
    """
    根据输入路径生成输出路径

    Args:
        input_path: 输入文件路径
        output_dir: 输出目录
        suffix: 文件名后缀
        ext: 新扩展名（如果需要改变），默认保持原扩展名

    Returns:
        输出文件路径
    """
    input_path = Path(input_path)
    file_ext = ext if ext else input_path.suffix

    return os.path.join(output_dir, f"{input_path.stem}{suffix}{file_ext}")


def with_suffix(path, suffix, ext=None):
    """在同一目录下生成带后缀的文件名，如 a.jpg -> a_edges.png"""
    return get_output_path(path, os.path.dirname(str(path)), suffix=suffix, ext=ext)
