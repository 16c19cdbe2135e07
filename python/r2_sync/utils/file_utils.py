"""ファイル操作関連のユーティリティ"""
import os
import mimetypes
from typing import Generator
from dataclasses import dataclass


DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class FileInfo:
    """ファイル情報"""
    path: str
    size: int
    relative_path: str

    @property
    def name(self) -> str:
        return os.path.basename(self.path)


def derive_key(root: str, full_path: str, prefix: str) -> str:
    """ローカルパスからオブジェクトキーを生成

    rootからの相対パスの区切り文字を "/" に統一し、prefixをそのまま前に付ける。
    prefixは "/" で終わっている前提で、区切りの補完はしない。
    """
    relative_path = os.path.relpath(full_path, root).replace("\\", "/")
    return f"{prefix}{relative_path}"


def guess_content_type(file_path: str) -> str:
    """拡張子からContent-Typeを推定"""
    content_type, _ = mimetypes.guess_type(file_path)
    return content_type or DEFAULT_CONTENT_TYPE


class FileScanner:
    """ファイルスキャン機能"""

    def scan_directory(self, directory: str) -> Generator[FileInfo, None, None]:
        """ディレクトリを再帰的にスキャンしてファイル情報を生成"""
        root = os.path.abspath(directory)
        if not os.path.exists(root):
            raise FileNotFoundError(f"Upload directory not found: {root}")
        if not os.path.isdir(root):
            raise NotADirectoryError(f"Not a directory: {root}")

        for current, dirs, files in os.walk(root):
            # 実行ごとに同じ順序にする
            dirs.sort()
            for file in sorted(files):
                file_path = os.path.join(current, file)
                yield FileInfo(
                    path=file_path,
                    size=os.path.getsize(file_path),
                    relative_path=os.path.relpath(file_path, root)
                )
