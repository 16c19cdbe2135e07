"""アップロード/削除の実行"""
import os
from typing import Optional

from ..models.config import Config
from ..models.results import RunSummary
from ..utils.logger import LoggerManager
from ..utils.file_utils import FileScanner
from .deleter import BulkDeleter
from .retry import RetryExecutor
from .uploader import UploadExecutor, ParallelUploadExecutor
from .s3_client import S3ClientManager


class TaskRunner:
    """設定に従ってアップロード/削除を実行"""

    def __init__(self, config: Config, s3_client=None,
                 retry: Optional[RetryExecutor] = None):
        self.config = config
        self.logger = LoggerManager.get_logger()
        self._s3_client = s3_client
        self.retry = retry or RetryExecutor(
            max_retries=config.options.max_retries,
            base_delay=config.options.base_delay,
        )
        self.file_scanner = FileScanner()

    @property
    def s3_client(self):
        """S3クライアント（初回アクセス時に作成）"""
        if self._s3_client is None:
            options = self.config.options
            client_manager = S3ClientManager(
                self.config.r2,
                max_pool_connections=max(options.concurrency, options.delete_concurrency),
            )
            self._s3_client = client_manager.get_client()
        return self._s3_client

    def run_upload(self) -> RunSummary:
        """アップロード元ディレクトリの全ファイルをアップロード

        ディレクトリが存在しない場合はリモート呼び出し前にFileNotFoundErrorを送出する。
        """
        options = self.config.options
        root = os.path.abspath(options.upload_dir)

        try:
            files = list(self.file_scanner.scan_directory(root))
        except (FileNotFoundError, NotADirectoryError) as e:
            self.logger.error(str(e))
            raise

        if not files:
            self.logger.info("No files found to upload.")
            return RunSummary()

        self.logger.info(
            f"Found {len(files)} files. Uploading to r2://{self.config.r2.bucket}/{options.prefix}"
        )

        executor = UploadExecutor(self.s3_client, self.config.r2, options, self.retry)
        parallel_executor = ParallelUploadExecutor(executor, options.concurrency)
        summary = parallel_executor.upload_files(root, files)

        self.logger.info(f"Done. Success: {summary.succeeded}, Failed: {summary.failed}")
        return summary

    def run_delete(self) -> RunSummary:
        """プレフィックス配下の全オブジェクトを削除

        列挙の失敗はそのまま送出する。個別の削除失敗は集計に含める。
        """
        options = self.config.options
        deleter = BulkDeleter(
            self.s3_client,
            self.config.r2.bucket,
            self.retry,
            concurrency=options.delete_concurrency,
        )
        summary = deleter.delete_all_under_prefix(options.prefix)

        self.logger.info(
            f"Delete completed. Success: {summary.succeeded}, Failed: {summary.failed}"
        )
        return summary
