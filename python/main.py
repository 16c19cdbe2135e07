#!/usr/bin/env python3
"""R2 Sync - アップロードのエントリーポイント"""
import sys

from r2_sync import R2Sync


def main() -> int:
    """メイン関数"""
    try:
        syncer = R2Sync()
        syncer.upload()
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # 個別ファイルの失敗は終了コードに影響しない
    return 0


if __name__ == "__main__":
    sys.exit(main())
