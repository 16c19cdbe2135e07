"""S3互換(R2)クライアント管理"""
import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import NoCredentialsError
from ..models.config import R2Config
from ..utils.logger import LoggerManager


class S3ClientManager:
    """R2向けS3クライアントの作成と管理"""

    def __init__(self, r2_config: R2Config, max_pool_connections: int = 10):
        self.r2_config = r2_config
        self.max_pool_connections = max_pool_connections
        self.logger = LoggerManager.get_logger()
        self._client = None

    def get_client(self):
        """S3クライアントを取得（必要に応じて作成）"""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self):
        """S3クライアントを作成"""
        missing = self.r2_config.missing_credentials()
        if missing:
            self.logger.error(f"R2 credentials not available: {', '.join(missing)} not set.")
            raise NoCredentialsError()

        # リトライはRetryExecutor側で行うので、botocore側は1回のみ
        boto_config = BotoConfig(
            signature_version="s3v4",
            max_pool_connections=self.max_pool_connections,
            retries={"max_attempts": 1, "mode": "standard"},
        )

        try:
            s3_client = boto3.client(
                "s3",
                region_name=self.r2_config.region,
                endpoint_url=self.r2_config.endpoint_url,
                aws_access_key_id=self.r2_config.access_key_id,
                aws_secret_access_key=self.r2_config.secret_access_key,
                config=boto_config,
            )
        except Exception as e:
            self.logger.error(f"Error creating S3 client: {e}")
            raise

        self.logger.info(f"S3 client created for endpoint {self.r2_config.endpoint_url}")
        return s3_client


def build_object_url(r2_config: R2Config, key: str) -> str:
    """公開ドメインがあればそれを、なければエンドポイント/バケット/キーを使う"""
    if r2_config.public_domain:
        return f"https://{r2_config.public_domain}/{key}"
    return f"{r2_config.endpoint_url}/{r2_config.bucket}/{key}"
