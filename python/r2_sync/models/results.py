"""実行結果のデータクラス"""
from dataclasses import dataclass
from typing import Iterable, Optional, Union


@dataclass(frozen=True)
class UploadOutcome:
    """単一ファイルのアップロード結果"""
    key: str
    path: str
    success: bool
    error: Optional[str] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class DeleteOutcome:
    """単一オブジェクトの削除結果"""
    key: str
    success: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class RunSummary:
    """実行全体の集計"""
    total: int = 0
    succeeded: int = 0
    failed: int = 0

    @classmethod
    def from_outcomes(
        cls, outcomes: Iterable[Union[UploadOutcome, DeleteOutcome]]
    ) -> 'RunSummary':
        """結果のリストから集計を作成"""
        succeeded = 0
        failed = 0
        for outcome in outcomes:
            if outcome.success:
                succeeded += 1
            else:
                failed += 1
        return cls(total=succeeded + failed, succeeded=succeeded, failed=failed)
