"""
差分検知ロジック

「フォロー中」から「フォロワー」を引いた集合 (フォローバックされていない
アカウント) を算出します。
"""

from typing import List, Sequence

from pydantic import BaseModel, Field

from .models import Category, CategoryResult


class CategoryLoadError(Exception):
    """
    カテゴリ読み込み失敗例外

    読み込みに失敗した CategoryResult が差分計算に渡された場合に送出されます。
    """

    def __init__(self, message: str, category: Category):
        """
        Args:
            message: エラーメッセージ
            category: 読み込みに失敗したカテゴリ
        """
        super().__init__(message)
        self.category = category


class DiffResult(BaseModel):
    """
    差分検知結果

    フォローバックされていない識別子と件数サマリーを保持します。
    """

    not_following_back: List[str] = Field(
        default_factory=list,
        description="フォロー中だがフォロワーにいない識別子 (昇順)"
    )
    following_count: int = Field(default=0, description="フォロー中の件数")
    followers_count: int = Field(default=0, description="フォロワーの件数")

    @property
    def not_following_back_count(self) -> int:
        """フォローバックされていない件数"""
        return len(self.not_following_back)


class DiffDetector:
    """
    差分検知ロジック

    入力が変わるたびに全体を再計算する純粋関数として実装します。
    """

    @staticmethod
    def diff(following: Sequence[str], followers: Sequence[str]) -> List[str]:
        """
        following に含まれ followers に含まれない識別子を返す

        Args:
            following: フォロー中の正規化済み識別子 (昇順)
            followers: フォロワーの正規化済み識別子

        Returns:
            List[str]: following の順序を保った差分
        """
        followers_set = set(followers)
        return [identifier for identifier in following if identifier not in followers_set]

    def detect_diff(
        self, following: CategoryResult, followers: CategoryResult
    ) -> DiffResult:
        """
        2カテゴリの集約結果から差分を検知

        Args:
            following: フォロー中の集約結果
            followers: フォロワーの集約結果

        Returns:
            DiffResult: 差分と件数サマリー

        Raises:
            CategoryLoadError: どちらかのカテゴリが読み込みに失敗している場合
        """
        for result in (following, followers):
            if result.failed:
                raise CategoryLoadError(
                    f"{result.category.value} did not load, diff cannot be computed",
                    category=result.category,
                )

        return DiffResult(
            not_following_back=self.diff(following.identifiers, followers.identifiers),
            following_count=len(following.identifiers),
            followers_count=len(followers.identifiers),
        )
