"""
并发处理工具模块

用线程池批量处理图片，tqdm 显示进度
"""
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Dict, List, Tuple

from tqdm import tqdm


class ParallelProcessor:
    """多线程批处理器"""

    def __init__(self, workers: int = 4, show_progress: bool = True):
        """
        Args:
            workers: 并发线程数
            show_progress: 是否显示进度条
        """
        if workers < 1:
            raise ValueError("workers 必须至少为 1")
        self.workers = workers
        self.show_progress = show_progress
        self.lock = threading.Lock()

    def process_items(self,
                      items: List[Any],
                      process_func: Callable[[Any], Any],
                      desc: str = "处理进度") -> Tuple[Dict[Any, Any], Dict[Any, str]]:
        """
        并发处理多个项目

        Args:
            items: 待处理的项目列表
            process_func: 处理函数，接收单个项目，返回结果；抛出异常视为失败
            desc: 进度条描述

        Returns:
            (成功项目 -> 结果, 失败项目 -> 错误信息)
        """
        results = {}
        failures = {}
        if not items:
            return results, failures

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            future_to_item = {
                executor.submit(process_func, item): item
                for item in items
            }

            with tqdm(total=len(items), desc=desc, unit="file",
                      disable=not self.show_progress) as pbar:
                for future in as_completed(future_to_item):
                    item = future_to_item[future]
                    try:
                        result = future.result()
                        with self.lock:
                            results[item] = result
                    except Exception as e:
                        with self.lock:
                            failures[item] = str(e)
                        tqdm.write(f"✗ 失败: {item} - {e}")
                    finally:
                        pbar.update(1)

        return results, failures
