"""
边框扫描核心模块

从边缘图的四条边分别向内扫描，找出最大的连续无边缘行/列块，
并据此给出内容区域的边界（BorderOffsets）和裁切矩形（CropRectangle）。

偏移约定：扫描"到达"的行/列是包含式的，记录的是最后一个无边缘行/列本身的索引。
- top / left：从 0 开始向内扫描，记录到达的最大索引（初始为 0）
- bottom / right：从 height-1 / width-1 开始向内扫描（不越过第 1 行/列），
  记录到达的最小索引（初始为 height / width）
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from debox.errors import InvalidDimensions


@dataclass(frozen=True)
class BorderOffsets:
    """内容区域的四条边界"""
    top: int
    bottom: int
    left: int
    right: int

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return self.top, self.bottom, self.left, self.right


@dataclass(frozen=True)
class CropRectangle:
    """由 BorderOffsets 推导出的裁切矩形"""
    width: int
    height: int
    row_offset: int
    col_offset: int

    @property
    def is_empty(self) -> bool:
        """宽或高为 0 表示无需裁切"""
        return self.width == 0 or self.height == 0

    def as_box(self) -> Tuple[int, int, int, int]:
        """(left, upper, right, lower)，与 PIL 的 crop 参数一致"""
        return (
            self.col_offset,
            self.row_offset,
            self.col_offset + self.width,
            self.row_offset + self.height,
        )

    def geometry(self) -> str:
        """WxH+X+Y 形式的几何描述"""
        return f"{self.width}x{self.height}+{self.col_offset}+{self.row_offset}"


def _validate(edge_grid, width: int, height: int) -> np.ndarray:
    """校验尺寸并返回只读的布尔数组"""
    if width < 1 or height < 1:
        raise InvalidDimensions(f"图像尺寸非法: {width}x{height}")

    grid = np.asarray(edge_grid, dtype=bool)
    if grid.ndim != 2:
        raise InvalidDimensions(f"边缘图必须是二维数组，实际维度: {grid.ndim}")

    if grid.shape != (height, width):
        raise InvalidDimensions(
            f"边缘图尺寸 {grid.shape[1]}x{grid.shape[0]} 与图像尺寸 {width}x{height} 不一致"
        )

    return grid


def _sweep_from_start(free_lines: np.ndarray) -> int:
    """从索引 0 向后扫描，返回到达的最后一个无边缘行/列索引"""
    reached = 0
    for idx in range(len(free_lines)):
        if not free_lines[idx]:
            break
        if reached < idx:
            reached = idx
    return reached


def _sweep_from_end(free_lines: np.ndarray) -> int:
    """从最后一个索引向前扫描（不越过索引 1），返回到达的最小索引"""
    reached = len(free_lines)
    for idx in range(len(free_lines) - 1, 0, -1):
        if not free_lines[idx]:
            break
        if reached > idx:
            reached = idx
    return reached


def _reconcile(start: int, end: int, extent: int) -> Tuple[int, int]:
    """
    两个方向的扫描只有在整条轴都无边缘时才会交错，此时恢复为完整范围
    """
    if start >= end:
        return 0, extent
    return start, end


def scan(edge_grid, width: int, height: int, parallel: bool = False) -> BorderOffsets:
    """
    扫描边缘图，找出上下左右四个方向的无边缘边框

    Args:
        edge_grid: 布尔边缘图，形状为 (height, width)，True 表示边缘像素
        width: 图像宽度
        height: 图像高度
        parallel: 是否用线程池并行执行四个方向的扫描（结果与串行一致）

    Returns:
        BorderOffsets，满足 0 <= top <= bottom <= height 且 0 <= left <= right <= width

    Raises:
        InvalidDimensions: 宽高非法或边缘图尺寸不一致
    """
    grid = _validate(edge_grid, width, height)

    # 整行/整列没有任何边缘像素
    free_rows = ~grid.any(axis=1)
    free_cols = ~grid.any(axis=0)

    if parallel:
        with ThreadPoolExecutor(max_workers=4) as executor:
            top_f = executor.submit(_sweep_from_start, free_rows)
            bottom_f = executor.submit(_sweep_from_end, free_rows)
            left_f = executor.submit(_sweep_from_start, free_cols)
            right_f = executor.submit(_sweep_from_end, free_cols)
            top, bottom = top_f.result(), bottom_f.result()
            left, right = left_f.result(), right_f.result()
    else:
        top = _sweep_from_start(free_rows)
        bottom = _sweep_from_end(free_rows)
        left = _sweep_from_start(free_cols)
        right = _sweep_from_end(free_cols)

    top, bottom = _reconcile(top, bottom, height)
    left, right = _reconcile(left, right, width)

    return BorderOffsets(top=top, bottom=bottom, left=left, right=right)


def to_crop_rectangle(offsets: BorderOffsets) -> CropRectangle:
    """将边界转换为裁切矩形"""
    return CropRectangle(
        width=offsets.right - offsets.left,
        height=offsets.bottom - offsets.top,
        row_offset=offsets.top,
        col_offset=offsets.left,
    )
