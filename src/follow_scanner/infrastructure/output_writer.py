"""JSON レポート出力コンポーネント"""

from typing import Iterable, Optional
from pathlib import Path
import json
from datetime import datetime, timezone

from ..domain.diff_detector import DiffResult
from ..domain.models import CategoryResult


class OutputWriter:
    """
    スキャン結果をファイルに出力

    Responsibilities:
    - カテゴリ結果と差分を JSON レポートに書き込み
    - フォローバックされていない一覧をテキストで書き込み
    - 出力先ディレクトリ管理
    """

    OUTPUT_DIR = Path("output")
    REPORT_FILENAME = "report.json"

    def __init__(self, output_dir: Optional[Path] = None):
        """
        OutputWriter を初期化

        Args:
            output_dir: 出力ディレクトリ。None の場合は OUTPUT_DIR を使用。
        """
        if output_dir is not None:
            self.OUTPUT_DIR = Path(output_dir)

    @property
    def report_file(self) -> Path:
        """レポートファイルのパス"""
        return self.OUTPUT_DIR / self.REPORT_FILENAME

    def write_output(
        self,
        followers: CategoryResult,
        following: CategoryResult,
        diff_result: DiffResult
    ) -> Path:
        """
        スキャン結果を JSON ファイルに出力

        Args:
            followers: フォロワーの集約結果
            following: フォロー中の集約結果
            diff_result: 差分検知結果

        Returns:
            Path: 出力ファイルパス

        Postconditions: report.json が生成される
        """
        # ディレクトリ自動作成
        self.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

        output_data = {
            "generated_at": self._get_current_timestamp(),
            "followers": self._category_summary(followers),
            "following": self._category_summary(following),
            "diff": {
                "not_following_back_count": diff_result.not_following_back_count,
                "not_following_back": diff_result.not_following_back
            }
        }

        with open(self.report_file, "w", encoding="utf-8") as f:
            json.dump(output_data, f, ensure_ascii=False, indent=2)

        return self.report_file

    def write_text_list(self, identifiers: Iterable[str], filename: str) -> Path:
        """
        識別子を1行1件 ('@username') のテキストファイルに出力

        Args:
            identifiers: 正規化済み識別子
            filename: 出力ファイル名

        Returns:
            Path: 出力ファイルパス
        """
        self.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
        path = self.OUTPUT_DIR / filename
        lines = [f"@{identifier}" for identifier in identifiers]
        with open(path, "w", encoding="utf-8") as f:
            f.write("\n".join(lines))
            if lines:
                f.write("\n")
        return path

    def _category_summary(self, result: CategoryResult) -> dict:
        """カテゴリ結果のレポート用サマリー"""
        return {
            "count": len(result.identifiers),
            "failed": result.failed,
            "warnings": list(result.warnings)
        }

    def _get_current_timestamp(self) -> str:
        """
        現在時刻を ISO 8601 形式で取得

        Returns:
            str: ISO 8601 形式のタイムスタンプ（UTC、Z サフィックス付き）
        """
        return datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"
