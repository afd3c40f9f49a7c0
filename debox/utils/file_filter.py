"""
文件查找工具
"""
import os
from typing import List, Optional, Set

from debox.config import BATCH_CONFIG


def find_images_recursive(directory: str, extensions: Optional[Set[str]] = None) -> List[str]:
    """
    递归查找目录下的所有图片文件（相对路径）

    Args:
        directory: 搜索目录
        extensions: 文件扩展名集合（如 {'.jpg', '.png'}），默认使用配置

    Returns:
        相对于 directory 的文件路径列表（已排序）
    """
    if extensions is None:
        extensions = BATCH_CONFIG['extensions']

    image_files = []
    for root, dirs, files in os.walk(directory):
        # 跳过隐藏目录
        dirs[:] = [d for d in dirs if not d.startswith('.')]
        for filename in files:
            if filename.startswith('.'):
                continue
            if os.path.splitext(filename)[1].lower() in extensions:
                full_path = os.path.join(root, filename)
                image_files.append(os.path.relpath(full_path, directory))

    return sorted(image_files)
