"""共有カーソル方式の固定サイズワーカープール"""
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from ..utils.logger import LoggerManager


T = TypeVar("T")
R = TypeVar("R")


class TaskCursor:
    """未処理アイテムのインデックスを排他的に払い出す"""

    def __init__(self, size: int):
        self.size = size
        self._next = 0
        self._lock = threading.Lock()

    def claim(self) -> Optional[int]:
        """次のインデックスを取得（使い切ったらNone）"""
        with self._lock:
            if self._next >= self.size:
                return None
            index = self._next
            self._next += 1
            return index


class WorkerPool:
    """concurrency個のワーカーが共有カーソルからアイテムを取り出して処理する"""

    def __init__(self, concurrency: int):
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1: {concurrency}")
        self.concurrency = concurrency
        self.logger = LoggerManager.get_logger()

    def run(self, items: Sequence[T], handler: Callable[[T], R]) -> List[R]:
        """全アイテムを処理して結果を返す（順序は保証しない）

        handlerはアイテム単位のエラーを結果に変換して返すこと。
        handlerから漏れた例外は全ワーカー終了後に送出される。
        """
        if not items:
            return []

        cursor = TaskCursor(len(items))
        results: List[Tuple[int, R]] = []
        results_lock = threading.Lock()

        def worker() -> None:
            while True:
                index = cursor.claim()
                if index is None:
                    return
                result = handler(items[index])
                with results_lock:
                    results.append((index, result))

        worker_count = min(self.concurrency, len(items))
        self.logger.debug(f"Starting {worker_count} workers for {len(items)} items")

        with ThreadPoolExecutor(max_workers=worker_count) as pool:
            futures = [pool.submit(worker) for _ in range(worker_count)]
        # withを抜けた時点で全ワーカーが終了している
        for future in futures:
            future.result()

        results.sort(key=lambda pair: pair[0])
        return [result for _, result in results]
