"""ロギング設定ユーティリティ"""
import logging
import os
from typing import Optional, List
from ..models.config import LoggingConfig


class LoggerManager:
    """r2_syncロガーの設定と管理"""

    LOGGER_NAME = "r2_sync"
    DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

    _logger: Optional[logging.Logger] = None

    @classmethod
    def setup(cls, config: LoggingConfig) -> logging.Logger:
        """ロガーをセットアップ（設定済みなら既存のロガーを返す）"""
        if cls._logger is not None:
            return cls._logger

        logger = logging.getLogger(cls.LOGGER_NAME)
        logger.setLevel(cls.resolve_level(config.level))
        logger.handlers = cls._create_handlers(config)

        cls._logger = logger
        return logger

    @staticmethod
    def resolve_level(level: str) -> int:
        """LOG_LEVELの値をログレベルに変換

        "debug" などのレベル名と "10" などの数値を受け付ける。不明な値はINFO。
        """
        level = level.strip()
        if level.isdigit():
            return int(level)
        resolved = logging.getLevelName(level.upper())
        return resolved if isinstance(resolved, int) else logging.INFO

    @classmethod
    def _create_handlers(cls, config: LoggingConfig) -> List[logging.Handler]:
        """コンソール（とファイル）のハンドラーを作成"""
        handlers: List[logging.Handler] = [logging.StreamHandler()]

        if config.file:
            log_dir = os.path.dirname(config.file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            handlers.append(logging.FileHandler(config.file, encoding="utf-8"))

        formatter = logging.Formatter(config.format, datefmt=cls.DATE_FORMAT)
        for handler in handlers:
            handler.setFormatter(formatter)
        return handlers

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """設定済みのロガーを取得"""
        if cls._logger is None:
            raise RuntimeError("Logger not initialized. Call setup() first.")
        return cls._logger

    @classmethod
    def reset(cls) -> None:
        """ハンドラーを閉じてロガーを未設定状態に戻す"""
        if cls._logger is not None:
            for handler in cls._logger.handlers:
                handler.close()
            cls._logger.handlers = []
        cls._logger = None
