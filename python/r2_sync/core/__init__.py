"""R2 Sync コアモジュール"""
from .s3_client import S3ClientManager
from .retry import RetryExecutor
from .pool import WorkerPool
from .uploader import UploadExecutor, ParallelUploadExecutor
from .deleter import BulkDeleter
from .task_runner import TaskRunner

__all__ = [
    'S3ClientManager',
    'RetryExecutor',
    'WorkerPool',
    'UploadExecutor',
    'ParallelUploadExecutor',
    'BulkDeleter',
    'TaskRunner'
]
