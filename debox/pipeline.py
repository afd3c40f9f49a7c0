"""
主流程管理模块

图片 -> Canny 边缘图 -> 边框扫描 -> 裁切矩形 -> 裁切输出
"""
import argparse
import logging
import os
import sys
from typing import Dict, Optional, Tuple

from debox import config
from debox.crop import crop_file, crop_image
from debox.edges import image_size, load_edge_grid, save_edge_map
from debox.errors import DeboxError
from debox.scan import scan, to_crop_rectangle
from debox.utils.file_filter import find_images_recursive
from debox.utils.parallel import ParallelProcessor
from debox.utils.path import ensure_dir, get_output_path, with_suffix

logger = logging.getLogger(__name__)


def debox_image(input_path: str, output_path: str,
                params: Optional[Dict] = None,
                edges_out: Optional[str] = None,
                dry_run: bool = False) -> Dict:
    """
    去除单张图片的上下黑边（letterbox）和左右黑边（pillarbox）

    Args:
        input_path: 输入图片路径
        output_path: 输出图片路径
        params: Canny 参数（可选，缺省使用配置）
        edges_out: 边缘图保存路径（可选，用于检查；dry_run 时不保存）
        dry_run: 只计算边界，不写出图片

    Returns:
        结果字典：offsets, rect, original_size, cropped_size 等

    Raises:
        EdgeDetectionFailure: 图片无法读取或边缘检测失败
        InvalidDimensions: 图片尺寸非法或与边缘图不一致
        CropFailure: 输出无法写出
    """
    logger.info("去除 %s 的黑边，输出到 %s", input_path, output_path)

    width, height = image_size(input_path)
    img, edge_grid = load_edge_grid(input_path, params)

    if edges_out and not dry_run:
        save_edge_map(edge_grid, edges_out)
        logger.info("边缘图已保存至 %s", edges_out)

    offsets = scan(edge_grid, width, height)
    logger.info("top: %d bottom: %d left: %d right: %d", *offsets.as_tuple())

    rect = to_crop_rectangle(offsets)
    if rect.is_empty:
        logger.warning("裁切区域为空，保留原图: %s", input_path)

    if dry_run:
        cropped = crop_image(img, rect)
    else:
        cropped = crop_file(img, rect, output_path)

    cropped_h, cropped_w = cropped.shape[:2]
    logger.info("original: [%dx%d] %s -> deboxed: [%dx%d] %s (HxW)",
                height, width, input_path, cropped_h, cropped_w, output_path)

    return {
        'input': input_path,
        'output': None if dry_run else output_path,
        'offsets': offsets,
        'rect': rect,
        'original_size': (width, height),
        'cropped_size': (cropped_w, cropped_h),
    }


def process_directory(input_dir: str, output_dir: str,
                      params: Optional[Dict] = None,
                      workers: Optional[int] = None,
                      dry_run: bool = False,
                      show_progress: bool = True) -> Tuple[int, int]:
    """
    批量处理目录下的所有图片（保持目录结构）

    Args:
        input_dir: 输入目录
        output_dir: 输出目录
        params: Canny 参数
        workers: 并发线程数（默认使用配置）
        dry_run: 只计算边界，不写出图片
        show_progress: 是否显示进度条

    Returns:
        (成功数量, 总数量)
    """
    input_dir = str(input_dir)
    output_dir = str(output_dir)

    if not os.path.isdir(input_dir):
        logger.error("输入目录不存在: %s", input_dir)
        return 0, 0

    image_files = find_images_recursive(input_dir)
    if not image_files:
        logger.warning("在 %s 中未找到任何图片文件", input_dir)
        return 0, 0

    if not dry_run:
        ensure_dir(output_dir)

    if workers is None:
        workers = config.BATCH_CONFIG['workers']
    suffix = config.OUTPUT_CONFIG['suffix']

    logger.info("=== 开始批量去黑边 ===")
    logger.info("输入目录: %s", input_dir)
    logger.info("输出目录: %s", output_dir)
    logger.info("文件数: %d | 线程数: %d", len(image_files), workers)

    def _process(rel_filepath):
        input_path = os.path.join(input_dir, rel_filepath)
        output_path = get_output_path(
            rel_filepath, os.path.join(output_dir, os.path.dirname(rel_filepath)), suffix=suffix
        )
        return debox_image(input_path, output_path, params=params, dry_run=dry_run)

    processor = ParallelProcessor(workers=workers, show_progress=show_progress)
    results, failures = processor.process_items(image_files, _process, desc="去黑边进度")

    logger.info("=== 批量去黑边完成 ===")
    logger.info("成功处理: %d/%d 个文件", len(results), len(image_files))
    if failures:
        logger.warning("失败文件: %d 个", len(failures))
        for f in sorted(failures)[:5]:
            logger.warning("  - %s: %s", f, failures[f])
        if len(failures) > 5:
            logger.warning("  ... 还有 %d 个", len(failures) - 5)

    return len(results), len(image_files)


def _resolve_output(input_path: str, output_path: str) -> str:
    """输出为已存在的目录时，在其中生成带后缀的文件名"""
    if os.path.isdir(output_path):
        return get_output_path(input_path, output_path, suffix=config.OUTPUT_CONFIG['suffix'])
    return output_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='debox',
        description='基于 Canny 边缘检测去除图片的 letterbox / pillarbox 黑边',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例用法:
  # 单张图片
  debox input.jpg output.jpg
  debox input.jpg output.jpg --edges-out input_edges.png

  # 调整 Canny 参数
  debox input.jpg output.jpg --radius 3 --low 5 --high 15

  # 批量处理目录（保持目录结构）
  debox data/raw/ data/deboxed/ --workers 8

  # 只查看边界，不写出
  debox input.jpg output.jpg --dry-run
        """
    )

    parser.add_argument('input', help='输入图片或目录')
    parser.add_argument('output', help='输出图片或目录')
    parser.add_argument('--radius', type=int, help=f"高斯核半径（默认 {config.CANNY_CONFIG['radius']}）")
    parser.add_argument('--sigma', type=float, help=f"高斯核标准差（默认 {config.CANNY_CONFIG['sigma']}）")
    parser.add_argument('--low', type=float, dest='low_percent',
                        help=f"Canny 低阈值百分比（默认 {config.CANNY_CONFIG['low_percent']}）")
    parser.add_argument('--high', type=float, dest='high_percent',
                        help=f"Canny 高阈值百分比（默认 {config.CANNY_CONFIG['high_percent']}）")
    parser.add_argument('--edges-out', metavar='PATH', nargs='?', const=True,
                        help='保存边缘图（仅单张图片模式；省略 PATH 时保存在输出图片旁）')
    parser.add_argument('--workers', type=int, metavar='N',
                        help=f"批处理线程数（默认 {config.BATCH_CONFIG['workers']}）")
    parser.add_argument('--dry-run', action='store_true', help='只计算边界，不写出图片')
    parser.add_argument('-v', '--verbose', action='store_true', help='输出调试信息')

    return parser


def main(argv=None):
    """主函数"""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(message)s',
        stream=sys.stderr,
    )

    params = {
        'radius': args.radius,
        'sigma': args.sigma,
        'low_percent': args.low_percent,
        'high_percent': args.high_percent,
    }

    try:
        params = config.merge_params(params)

        if os.path.isfile(args.input):
            output_path = _resolve_output(args.input, args.output)
            edges_out = args.edges_out
            if edges_out is True:
                edges_out = with_suffix(output_path, config.OUTPUT_CONFIG['edges_suffix'], ext='.png')
            debox_image(args.input, output_path, params=params,
                        edges_out=edges_out, dry_run=args.dry_run)
            return 0

        elif os.path.isdir(args.input):
            if args.edges_out:
                parser.error('--edges-out 仅支持单张图片')
            success_count, total_count = process_directory(
                args.input, args.output, params=params,
                workers=args.workers, dry_run=args.dry_run
            )
            return 0 if total_count > 0 and success_count == total_count else 1

        else:
            logger.error("错误：输入路径不存在或无效: %s", args.input)
            return 1

    except (DeboxError, ValueError) as e:
        logger.error("错误：%s", e)
        return 1


if __name__ == '__main__':
    sys.exit(main())
