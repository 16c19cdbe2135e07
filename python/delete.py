#!/usr/bin/env python3
"""R2 Sync - 削除のエントリーポイント"""
import sys

from r2_sync import R2Sync


def main() -> int:
    """メイン関数"""
    try:
        syncer = R2Sync()
        syncer.delete()
    except Exception as e:
        print(f"Delete operation failed: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
