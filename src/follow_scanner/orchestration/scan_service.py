"""スキャンオーケストレーションサービス"""

from typing import List, Optional, Sequence
import logging
import time
import uuid
from pydantic import BaseModel

from ..domain.diff_detector import DiffDetector, DiffResult
from ..domain.models import Category, CategoryResult, FileRecord
from ..infrastructure.output_writer import OutputWriter
from .aggregator import ExportAggregator


class ScanResult(BaseModel):
    """
    スキャン結果サマリー

    Attributes:
        success: 両カテゴリが読み込まれ、差分が計算できたか
        followers: フォロワーの集約結果
        following: フォロー中の集約結果
        diff: 差分検知結果（失敗時は None）
        errors: エラーメッセージリスト
        execution_time_seconds: 実行時間（秒）
    """
    success: bool
    followers: CategoryResult
    following: CategoryResult
    diff: Optional[DiffResult] = None
    errors: List[str] = []
    execution_time_seconds: float = 0.0


class ScanService:
    """
    スキャン処理全体のオーケストレーション

    Responsibilities:
    - カテゴリごとの集約、差分検知、レポート出力の調整
    - カテゴリ読み込み失敗時に差分計算をブロック
    - 構造化ログ出力
    """

    def __init__(
        self,
        aggregator: ExportAggregator,
        diff_detector: DiffDetector,
        output_writer: Optional[OutputWriter] = None
    ):
        """
        ScanService を初期化

        Args:
            aggregator: ファイル集約サービス
            diff_detector: 差分検知サービス
            output_writer: レポート出力サービス（None の場合は出力しない）
        """
        self.aggregator = aggregator
        self.diff_detector = diff_detector
        self.output_writer = output_writer
        self.logger = logging.getLogger(__name__)

    def run_scan(
        self,
        followers_files: Sequence[FileRecord],
        following_files: Sequence[FileRecord]
    ) -> ScanResult:
        """
        スキャン処理を実行

        Args:
            followers_files: フォロワーとして渡されたファイル群
            following_files: フォロー中として渡されたファイル群

        Returns:
            ScanResult: スキャン結果サマリー

        Invariants: 読み込みに失敗したカテゴリは差分計算に渡さない
        """
        start_time = time.time()
        execution_id = str(uuid.uuid4())
        self.logger.info(
            "Starting scan",
            extra={
                "execution_id": execution_id,
                "followers_files": len(followers_files),
                "following_files": len(following_files)
            }
        )

        followers = self.aggregator.aggregate(followers_files, Category.FOLLOWERS)
        following = self.aggregator.aggregate(following_files, Category.FOLLOWING)

        errors = [
            f"Could not load any usernames for {result.category.value}"
            for result in (followers, following)
            if result.failed
        ]

        if errors:
            self.logger.error(
                f"Scan failed: {', '.join(errors)}",
                extra={"execution_id": execution_id}
            )
            return ScanResult(
                success=False,
                followers=followers,
                following=following,
                errors=errors,
                execution_time_seconds=time.time() - start_time
            )

        diff_result = self.diff_detector.detect_diff(following, followers)

        if self.output_writer is not None:
            output_path = self.output_writer.write_output(followers, following, diff_result)
            self.logger.info(f"Report written to {output_path}")

        execution_time = time.time() - start_time
        self.logger.info(
            "Scan completed",
            extra={
                "execution_id": execution_id,
                "followers_count": diff_result.followers_count,
                "following_count": diff_result.following_count,
                "not_following_back_count": diff_result.not_following_back_count,
                "execution_time_seconds": execution_time
            }
        )

        return ScanResult(
            success=True,
            followers=followers,
            following=following,
            diff=diff_result,
            execution_time_seconds=execution_time
        )
