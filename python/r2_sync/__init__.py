"""R2 Sync パッケージ"""
from typing import Optional
from .models.config import Config
from .models.results import RunSummary
from .utils.logger import LoggerManager
from .core.task_runner import TaskRunner


class R2Sync:
    """R2同期のメインクラス"""

    def __init__(self, config: Optional[Config] = None, s3_client=None):
        # 設定を読み込み
        self.config = config or Config.from_env()

        # ロガーをセットアップ
        self.logger = LoggerManager.setup(self.config.logging)
        self.logger.info("R2 Sync initialized")

        # タスクランナーを作成
        self.task_runner = TaskRunner(self.config, s3_client=s3_client)

    def upload(self) -> RunSummary:
        """ディレクトリをアップロード"""
        self.logger.info("Starting R2 upload process...")
        return self.task_runner.run_upload()

    def delete(self) -> RunSummary:
        """プレフィックス配下を削除"""
        self.logger.info("Starting R2 delete process...")
        return self.task_runner.run_delete()


__all__ = ['R2Sync', 'Config', 'RunSummary']
