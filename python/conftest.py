"""テスト共通のフィクスチャ"""
import threading
import time

import pytest
from botocore.exceptions import ClientError

from r2_sync.models.config import Config, LoggingConfig, R2Config, SyncOptions
from r2_sync.utils.logger import LoggerManager


def client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": f"{code} error"}}, operation)


class FakeListPaginator:
    """boto3のlist_objects_v2ページネーターと同じ辿り方をする"""

    def __init__(self, client):
        self.client = client

    def paginate(self, **params):
        while True:
            response = self.client.list_objects_v2(**params)
            yield response
            token = response.get("NextContinuationToken")
            if not token:
                return
            params = dict(params, ContinuationToken=token)


class FakeS3Client:
    """呼び出しを記録するスレッドセーフなS3クライアントの代用品"""

    def __init__(self, objects=None, page_size=1000, put_delay=0.0):
        self.objects = dict(objects or {})
        self.page_size = page_size
        self.put_delay = put_delay
        self.put_calls = []
        self.delete_calls = []
        self.list_calls = []
        # key -> 失敗させる残り回数
        self.put_failures = {}
        self.delete_failures = {}
        self.list_error = None
        self.in_flight = 0
        self.max_in_flight = 0
        self.lock = threading.Lock()

    def _enter(self):
        with self.lock:
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)

    def _leave(self):
        with self.lock:
            self.in_flight -= 1

    def put_object(self, Bucket, Key, Body, ContentType, CacheControl):
        self._enter()
        try:
            if self.put_delay:
                time.sleep(self.put_delay)
            data = Body.read()
            with self.lock:
                self.put_calls.append({
                    "Bucket": Bucket,
                    "Key": Key,
                    "ContentType": ContentType,
                    "CacheControl": CacheControl,
                    "Body": data,
                })
                remaining = self.put_failures.get(Key, 0)
                if remaining:
                    self.put_failures[Key] = remaining - 1
                    raise client_error("InternalError", "PutObject")
                self.objects[Key] = data
            return {"ETag": '"etag"'}
        finally:
            self._leave()

    def delete_object(self, Bucket, Key):
        self._enter()
        try:
            with self.lock:
                self.delete_calls.append(Key)
                remaining = self.delete_failures.get(Key, 0)
                if remaining:
                    self.delete_failures[Key] = remaining - 1
                    raise client_error("InternalError", "DeleteObject")
                # 存在しないキーの削除も成功（S3と同じ）
                self.objects.pop(Key, None)
            return {}
        finally:
            self._leave()

    def get_paginator(self, operation_name):
        assert operation_name == "list_objects_v2"
        return FakeListPaginator(self)

    def list_objects_v2(self, Bucket, Prefix="", ContinuationToken=None):
        with self.lock:
            self.list_calls.append({"Prefix": Prefix, "ContinuationToken": ContinuationToken})
            if self.list_error is not None:
                raise self.list_error
            keys = sorted(k for k in self.objects if k.startswith(Prefix))
        start = int(ContinuationToken) if ContinuationToken else 0
        page = keys[start:start + self.page_size]
        response = {"KeyCount": len(page), "IsTruncated": start + self.page_size < len(keys)}
        if page:
            response["Contents"] = [{"Key": k} for k in page]
        if response["IsTruncated"]:
            response["NextContinuationToken"] = str(start + self.page_size)
        return response


@pytest.fixture(autouse=True)
def logger():
    """各テストでロガーを初期化"""
    LoggerManager.reset()
    yield LoggerManager.setup(LoggingConfig(level="DEBUG"))
    LoggerManager.reset()


@pytest.fixture
def fake_client():
    return FakeS3Client()


@pytest.fixture
def r2_config():
    return R2Config(
        account_id="acct",
        access_key_id="key-id",
        secret_access_key="secret",
        bucket="test-bucket",
    )


@pytest.fixture
def make_config(tmp_path, r2_config):
    """オプションを上書きしたConfigを作る"""
    def _make(**options):
        options.setdefault("upload_dir", str(tmp_path / "dist"))
        options.setdefault("prefix", "p/")
        options.setdefault("base_delay", 0)
        return Config(
            logging=LoggingConfig(level="DEBUG"),
            r2=r2_config,
            options=SyncOptions(**options),
        )
    return _make
