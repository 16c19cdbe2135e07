"""実行進捗の集計"""
import threading
import time


class RunProgress:
    """複数ワーカーから更新される成功/失敗カウンター"""

    def __init__(self, total: int):
        self.total = total
        self.succeeded = 0
        self.failed = 0
        self.lock = threading.Lock()
        self.start_time = time.time()

    def record_success(self) -> int:
        """成功数を加算して新しい値を返す"""
        with self.lock:
            self.succeeded += 1
            return self.succeeded

    def record_failure(self) -> int:
        """失敗数を加算して新しい値を返す"""
        with self.lock:
            self.failed += 1
            return self.failed

    @property
    def elapsed(self) -> float:
        return time.time() - self.start_time
