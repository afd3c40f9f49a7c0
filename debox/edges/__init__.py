"""
边缘检测模块
"""

from .canny import detect_edges, image_size, load_edge_grid, read_image, save_edge_map

__all__ = [
    'detect_edges',
    'image_size',
    'load_edge_grid',
    'read_image',
    'save_edge_map',
]
