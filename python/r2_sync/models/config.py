"""設定管理用のデータクラス"""
from dataclasses import dataclass, field
from typing import List, Optional
import os

from dotenv import find_dotenv, load_dotenv


@dataclass
class LoggingConfig:
    """ロギング設定"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(levelname)s - %(message)s"
    file: Optional[str] = None


@dataclass
class R2Config:
    """R2(S3互換ストレージ)関連の設定"""
    account_id: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    bucket: str = "sf2-assets"
    public_domain: Optional[str] = None
    region: str = "auto"

    def __post_init__(self):
        if not self.bucket:
            raise ValueError("bucket cannot be empty")
        # 空文字列は未設定扱い
        if self.public_domain is not None and not self.public_domain.strip():
            self.public_domain = None

    @property
    def endpoint_url(self) -> str:
        return f"https://{self.account_id}.r2.cloudflarestorage.com"

    def missing_credentials(self) -> List[str]:
        """未設定の必須項目名を返す"""
        required = {
            "R2_ACCOUNT_ID": self.account_id,
            "R2_ACCESS_KEY_ID": self.access_key_id,
            "R2_SECRET_ACCESS_KEY": self.secret_access_key,
        }
        return [name for name, value in required.items() if not value]


@dataclass
class SyncOptions:
    """アップロード/削除オプション"""
    upload_dir: str = "./dist"
    prefix: str = "jay-test/"
    concurrency: int = 8
    delete_concurrency: int = 8
    max_retries: int = 3
    base_delay: float = 0.3  # 秒
    cache_control: str = "public, max-age=31536000, immutable"

    def __post_init__(self):
        """オプションのバリデーション"""
        if self.concurrency < 1:
            raise ValueError(
                f"Invalid concurrency: {self.concurrency}. Must be at least 1"
            )
        if self.delete_concurrency < 1:
            raise ValueError(
                f"Invalid delete_concurrency: {self.delete_concurrency}. Must be at least 1"
            )
        if self.max_retries < 0:
            raise ValueError(
                f"Invalid max_retries: {self.max_retries}. Must not be negative"
            )
        if self.base_delay < 0:
            raise ValueError(
                f"Invalid base_delay: {self.base_delay}. Must not be negative"
            )


@dataclass
class Config:
    """メイン設定クラス"""
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    r2: R2Config = field(default_factory=R2Config)
    options: SyncOptions = field(default_factory=SyncOptions)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> 'Config':
        """環境変数(.envを含む)から読み込み"""
        if env_file is not None:
            if not os.path.exists(env_file):
                raise FileNotFoundError(f"Environment file {env_file} not found.")
            load_dotenv(env_file)
        else:
            # カレントディレクトリから上位に向かって.envを探す
            load_dotenv(find_dotenv(usecwd=True))

        logging_config = LoggingConfig(
            level=os.getenv("LOG_LEVEL", "INFO"),
            file=os.getenv("LOG_FILE") or None,
        )
        r2_config = R2Config(
            account_id=os.getenv("R2_ACCOUNT_ID"),
            access_key_id=os.getenv("R2_ACCESS_KEY_ID"),
            secret_access_key=os.getenv("R2_SECRET_ACCESS_KEY"),
            public_domain=os.getenv("R2_PUBLIC_DOMAIN"),
        )

        return cls(
            logging=logging_config,
            r2=r2_config,
            options=SyncOptions(),
        )
