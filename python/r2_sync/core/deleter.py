"""プレフィックス配下のオブジェクト一括削除"""
from typing import List

from botocore.exceptions import ClientError

from ..models.results import DeleteOutcome, RunSummary
from ..utils.logger import LoggerManager
from .pool import WorkerPool
from .retry import RetryExecutor


# 存在しないキーの削除は成功として扱う
MISSING_KEY_ERROR_CODES = ("NoSuchKey", "404")


class BulkDeleter:
    """プレフィックス配下の全オブジェクトを列挙して削除する"""

    def __init__(self, s3_client, bucket: str, retry: RetryExecutor,
                 concurrency: int = 8):
        self.s3_client = s3_client
        self.bucket = bucket
        self.retry = retry
        self.pool = WorkerPool(concurrency)
        self.logger = LoggerManager.get_logger()

    def list_keys(self, prefix: str) -> List[str]:
        """プレフィックス配下の全キーを取得（継続トークンがなくなるまでページを辿る）

        列挙の失敗はそのまま送出する。
        """
        keys: List[str] = []
        page = 0

        paginator = self.s3_client.get_paginator("list_objects_v2")
        for response in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
            page += 1
            for obj in response.get("Contents", []) or []:
                key = obj["Key"]
                if not key.startswith(prefix):
                    self.logger.warning(f"Skipping key outside prefix {prefix}: {key}")
                    continue
                keys.append(key)

        self.logger.debug(f"Listed {len(keys)} keys under {prefix} in {page} page(s)")
        return keys

    def delete_key(self, key: str) -> DeleteOutcome:
        """単一オブジェクトを削除（失敗は結果として返す）"""
        try:
            self.retry.execute(
                lambda: self._delete_object(key), description=key
            )
        except Exception as e:
            message = str(e)
            self.logger.error(f"Failed to delete {key}: {message}")
            return DeleteOutcome(key=key, success=False, error=message)

        self.logger.info(f"Deleted: {key}")
        return DeleteOutcome(key=key, success=True)

    def _delete_object(self, key: str) -> None:
        try:
            self.s3_client.delete_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code in MISSING_KEY_ERROR_CODES:
                self.logger.debug(f"Already absent: {key}")
                return
            raise

    def delete_all_under_prefix(self, prefix: str) -> RunSummary:
        """プレフィックス配下を全て削除して集計を返す"""
        if not prefix:
            raise ValueError("Refusing to delete with an empty prefix")

        self.logger.info(f"Deleting existing files in path: {prefix}")
        keys = self.list_keys(prefix)

        if not keys:
            self.logger.info("No existing files found to delete.")
            return RunSummary()

        self.logger.info(f"Found {len(keys)} files to delete.")
        outcomes = self.pool.run(keys, self.delete_key)
        return RunSummary.from_outcomes(outcomes)
