"""
项目配置管理

包含边缘检测参数、输出命名、批处理参数等
"""
import copy
from pathlib import Path

# ============================================================================
# 路径配置
# ============================================================================

# 项目根目录
PROJECT_ROOT = Path(__file__).parent.parent.absolute()

# ============================================================================
# 边缘检测配置
# ============================================================================

# Canny 边缘检测（对应 ImageMagick 的 -canny 5x1+10%+20%）
CANNY_CONFIG = {
    'radius': 5,           # 高斯核半径（核尺寸 = 2 * radius + 1）
    'sigma': 1.0,          # 高斯核标准差
    'low_percent': 10.0,   # 低阈值（占 8 位灰度范围的百分比）
    'high_percent': 20.0,  # 高阈值（占 8 位灰度范围的百分比）
}

# ============================================================================
# 输出配置
# ============================================================================

OUTPUT_CONFIG = {
    'suffix': '_deboxed',      # 裁切后图片的文件名后缀
    'edges_suffix': '_edges',  # 边缘图的文件名后缀
}

# ============================================================================
# 批处理配置
# ============================================================================

BATCH_CONFIG = {
    'workers': 4,  # 并发线程数
    'extensions': {'.jpg', '.jpeg', '.png', '.bmp', '.tiff', '.tif', '.webp'},
}

# ============================================================================
# 配置校验
# ============================================================================


def _check_canny(cfg):
    """返回 Canny 参数中的问题列表"""
    errors = []

    if int(cfg['radius']) < 0:
        errors.append("radius 不能为负数")

    if float(cfg['sigma']) <= 0:
        errors.append("sigma 必须大于 0")

    low = float(cfg['low_percent'])
    high = float(cfg['high_percent'])
    if not (0.0 <= low <= 100.0):
        errors.append("low_percent 必须在 [0, 100] 范围内")
    if not (0.0 <= high <= 100.0):
        errors.append("high_percent 必须在 [0, 100] 范围内")
    if low > high:
        errors.append("low_percent 不能大于 high_percent")

    return errors


def validate_config():
    """校验配置参数的合理性"""
    errors = _check_canny(CANNY_CONFIG)

    if BATCH_CONFIG['workers'] < 1:
        errors.append("workers 必须至少为 1")

    if not OUTPUT_CONFIG['suffix']:
        errors.append("输出后缀不能为空（否则会覆盖原图）")

    if errors:
        raise ValueError(f"配置校验失败:\n" + "\n".join(f"  - {e}" for e in errors))

    return True


def merge_params(custom_params=None):
    """
    合并自定义 Canny 参数和默认参数

    Args:
        custom_params: 自定义参数字典，值为 None 的键会被忽略

    Returns:
        合并后的参数字典

    Raises:
        ValueError: 合并后的参数不合法
    """
    merged = copy.deepcopy(CANNY_CONFIG)

    for key, value in (custom_params or {}).items():
        if key not in merged:
            raise ValueError(f"未知的边缘检测参数: {key}")
        if value is not None:
            merged[key] = value

    errors = _check_canny(merged)
    if errors:
        raise ValueError("边缘检测参数不合法:\n" + "\n".join(f"  - {e}" for e in errors))

    return merged

# ============================================================================
# 配置摘要
# ============================================================================


def config_summary():
    """返回当前配置的摘要信息"""
    validate_config()

    return {
        'paths': {
            'project_root': str(PROJECT_ROOT),
        },
        'canny': dict(CANNY_CONFIG),
        'output': dict(OUTPUT_CONFIG),
        'batch': {
            'workers': BATCH_CONFIG['workers'],
            'extensions': sorted(BATCH_CONFIG['extensions']),
        },
    }


# 启动时校验配置
validate_config()
