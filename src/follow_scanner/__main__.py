"""CLI エントリーポイント"""

import argparse
import sys
import logging
import os
from pathlib import Path

from .orchestration.scan_service import ScanService
from .orchestration.aggregator import ExportAggregator
from .domain.diff_detector import DiffDetector
from .domain.models import Category
from .infrastructure.export_reader import ExportReader
from .infrastructure.output_writer import OutputWriter


NOT_FOLLOWING_BACK_FILENAME = "not_following_back.txt"


def build_parser() -> argparse.ArgumentParser:
    """コマンドライン引数パーサーを構築"""
    parser = argparse.ArgumentParser(
        prog="follow_scanner",
        description="Compare Instagram followers and following from the official data download.",
    )
    parser.add_argument(
        "--followers", nargs="+", default=[], metavar="PATH",
        help="followers export files (followers_1.json, followers_1.html, ...)",
    )
    parser.add_argument(
        "--following", nargs="+", default=[], metavar="PATH",
        help="following export files (following.json, following.html, ...)",
    )
    parser.add_argument(
        "--archive", metavar="ZIP",
        help="Instagram data download ZIP (followers/following files are discovered by name)",
    )
    parser.add_argument(
        "--output-dir", metavar="DIR",
        help="report output directory (default: $FOLLOW_SCANNER_OUTPUT_DIR or 'output')",
    )
    return parser


def main(argv=None):
    """
    CLI エントリーポイント

    Usage:
        python -m follow_scanner --followers followers_1.json --following following.json
        python -m follow_scanner --archive instagram-export.zip

    Environment:
        FOLLOW_SCANNER_LOG_LEVEL: ログレベル (既定: INFO)
        FOLLOW_SCANNER_OUTPUT_DIR: 出力ディレクトリ (既定: output)
        FOLLOW_SCANNER_MAX_WORKERS: ファイル並列処理数 (既定: 1)

    Exit codes:
        0: 成功
        1: 失敗
    """
    # ロギング設定
    logging.basicConfig(
        level=os.environ.get("FOLLOW_SCANNER_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    logger = logging.getLogger(__name__)

    args = build_parser().parse_args(argv)

    try:
        # 入力ファイルの読み込み
        reader = ExportReader()
        followers_files = reader.read_files(args.followers)
        following_files = reader.read_files(args.following)
        if args.archive:
            found = reader.read_archive(args.archive)
            followers_files.extend(found[Category.FOLLOWERS])
            following_files.extend(found[Category.FOLLOWING])

        # 依存関係の初期化
        output_dir = args.output_dir or os.environ.get("FOLLOW_SCANNER_OUTPUT_DIR", "output")
        max_workers = int(os.environ.get("FOLLOW_SCANNER_MAX_WORKERS", "1"))
        output_writer = OutputWriter(Path(output_dir))

        service = ScanService(
            aggregator=ExportAggregator(max_workers=max_workers),
            diff_detector=DiffDetector(),
            output_writer=output_writer
        )

        # スキャン実行
        logger.info("Starting scan...")
        result = service.run_scan(followers_files, following_files)

        for warning in result.followers.warnings + result.following.warnings:
            logger.warning(warning)

        # 結果ログ出力
        if result.success:
            output_writer.write_text_list(
                result.diff.not_following_back, NOT_FOLLOWING_BACK_FILENAME
            )
            logger.info(
                f"Scan completed successfully: "
                f"{result.diff.followers_count} followers, "
                f"{result.diff.following_count} following, "
                f"{result.diff.not_following_back_count} not following back"
            )
            sys.exit(0)
        else:
            logger.error(
                f"Scan failed: {', '.join(result.errors)}"
            )
            sys.exit(1)

    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
