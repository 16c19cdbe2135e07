"""R2アップロード実行クラス"""
from typing import List, Optional

from ..models.config import R2Config, SyncOptions
from ..models.results import RunSummary, UploadOutcome
from ..utils.file_utils import FileInfo, derive_key, guess_content_type
from ..utils.logger import LoggerManager
from ..utils.progress import RunProgress
from .pool import WorkerPool
from .retry import RetryExecutor
from .s3_client import build_object_url


class UploadExecutor:
    """ファイルアップロードの実行"""

    def __init__(self, s3_client, r2_config: R2Config, options: SyncOptions,
                 retry: RetryExecutor):
        self.s3_client = s3_client
        self.r2_config = r2_config
        self.options = options
        self.retry = retry
        self.logger = LoggerManager.get_logger()

    def upload_file(self, root: str, file_info: FileInfo,
                    progress: Optional[RunProgress] = None) -> UploadOutcome:
        """単一ファイルをアップロード（失敗は結果として返す）"""
        key = derive_key(root, file_info.path, self.options.prefix)

        try:
            self._put_file(file_info.path, key)
        except Exception as e:
            if progress is not None:
                progress.record_failure()
            self.logger.error(f"FAILED {file_info.path}: {e}")
            return UploadOutcome(key=key, path=file_info.path, success=False, error=str(e))

        url = build_object_url(self.r2_config, key)
        if progress is not None:
            ok = progress.record_success()
            line = f"[{ok}/{progress.total}] uploaded: {key}"
        else:
            line = f"uploaded: {key}"
        if self.r2_config.public_domain:
            line += f" -> {url}"
        self.logger.info(line)
        return UploadOutcome(key=key, path=file_info.path, success=True, url=url)

    def _put_file(self, path: str, key: str) -> None:
        """put_objectをリトライ付きで実行"""
        content_type = guess_content_type(path)

        with open(path, "rb") as body:
            def put():
                # リトライ時は先頭から送り直す
                body.seek(0)
                return self.s3_client.put_object(
                    Bucket=self.r2_config.bucket,
                    Key=key,
                    Body=body,
                    ContentType=content_type,
                    CacheControl=self.options.cache_control,
                )

            self.retry.execute(put, description=key)


class ParallelUploadExecutor:
    """並列アップロード実行"""

    def __init__(self, executor: UploadExecutor, max_workers: int = 8):
        self.executor = executor
        self.pool = WorkerPool(max_workers)
        self.logger = LoggerManager.get_logger()

    def upload_files(self, root: str, files: List[FileInfo]) -> RunSummary:
        """複数ファイルを並列でアップロード

        Args:
            root: アップロード元ディレクトリ（キー生成の基準）
            files: アップロード対象のファイル情報リスト

        Returns:
            成功数・失敗数の集計
        """
        if not files:
            return RunSummary()

        self.logger.debug(
            f"Starting parallel upload of {len(files)} files with {self.pool.concurrency} workers"
        )
        progress = RunProgress(len(files))
        outcomes = self.pool.run(
            files, lambda file_info: self.executor.upload_file(root, file_info, progress)
        )
        self.logger.debug(f"Upload of {len(files)} files finished in {progress.elapsed:.1f}s")
        return RunSummary.from_outcomes(outcomes)
