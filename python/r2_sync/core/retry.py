"""指数バックオフ付きリトライ"""
import time
from typing import Callable, List, TypeVar

from ..utils.logger import LoggerManager


T = TypeVar("T")


class RetryExecutor:
    """冪等なリモート書き込みを指数バックオフでリトライする

    初回失敗後、最大 max_retries 回まで再試行する（合計 max_retries + 1 回）。
    k 回目の再試行の前に base_delay * 2 ** (k - 1) 秒待つ。ジッターはなし。
    再試行しきった場合は最後の例外をそのまま送出する。
    """

    def __init__(
        self,
        max_retries: int = 3,
        base_delay: float = 0.3,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if max_retries < 0:
            raise ValueError(f"max_retries must not be negative: {max_retries}")
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.sleep = sleep
        self.logger = LoggerManager.get_logger()

    def delay_for(self, retry: int) -> float:
        """retry回目(1始まり)の再試行前の待ち時間"""
        return self.base_delay * 2 ** (retry - 1)

    def delays(self) -> List[float]:
        """待ち時間のスケジュール"""
        return [self.delay_for(k) for k in range(1, self.max_retries + 1)]

    def execute(self, operation: Callable[[], T], description: str = "") -> T:
        """operationを実行し、失敗時はリトライする"""
        retry = 0
        while True:
            try:
                return operation()
            except Exception as e:
                retry += 1
                if retry > self.max_retries:
                    raise
                wait_time = self.delay_for(retry)
                self.logger.warning(
                    f"Attempt {retry}/{self.max_retries + 1} failed, "
                    f"retrying in {wait_time:.2f}s: {description} ({e})"
                )
                self.sleep(wait_time)
