"""
DiffDetector のユニットテスト

「フォロー中 − フォロワー」の差分計算を検証します。
"""

import pytest

from src.follow_scanner.domain.diff_detector import (
    CategoryLoadError,
    DiffDetector,
    DiffResult,
)
from src.follow_scanner.domain.models import Category, CategoryResult


def create_result(category: Category, identifiers) -> CategoryResult:
    """テスト用 CategoryResult を作成するヘルパー"""
    return CategoryResult(category=category, identifiers=sorted(identifiers))


class TestDiffResult:
    """DiffResult モデルのテスト"""

    def test_diff_result_default_values(self):
        """DiffResult のデフォルト値が空であること"""
        result = DiffResult()
        assert result.not_following_back == []
        assert result.not_following_back_count == 0
        assert result.following_count == 0
        assert result.followers_count == 0


class TestDiff:
    """DiffDetector.diff のテスト"""

    def test_diff_basic(self):
        """フォロワーにいない識別子だけが返ること"""
        result = DiffDetector.diff(["alice", "bob", "carol"], ["alice", "bob"])
        assert result == ["carol"]

    def test_diff_preserves_following_order(self):
        """following の順序が保たれること"""
        result = DiffDetector.diff(["a", "c", "e", "g"], ["c", "x"])
        assert result == ["a", "e", "g"]

    def test_diff_all_following_back(self):
        """全員フォローバックしていれば空"""
        assert DiffDetector.diff(["alice"], ["alice", "zed"]) == []

    def test_diff_empty_inputs(self):
        """空入力でも例外にならないこと"""
        assert DiffDetector.diff([], []) == []
        assert DiffDetector.diff(["alice"], []) == ["alice"]

    def test_diff_does_not_mutate_inputs(self):
        """入力を変更しないこと"""
        following = ["alice", "bob"]
        followers = ["bob"]
        DiffDetector.diff(following, followers)
        assert following == ["alice", "bob"]
        assert followers == ["bob"]


class TestDetectDiff:
    """DiffDetector.detect_diff のテスト"""

    @pytest.fixture
    def detector(self):
        return DiffDetector()

    def test_detect_diff_counts(self, detector):
        """差分と件数が設定されること"""
        following = create_result(Category.FOLLOWING, ["alice", "bob", "carol"])
        followers = create_result(Category.FOLLOWERS, ["alice", "bob", "dave"])

        result = detector.detect_diff(following, followers)

        assert result.not_following_back == ["carol"]
        assert result.following_count == 3
        assert result.followers_count == 3
        assert result.not_following_back_count == 1

    def test_detect_diff_blocks_failed_following(self, detector):
        """following が読み込み失敗なら CategoryLoadError"""
        following = create_result(Category.FOLLOWING, [])
        followers = create_result(Category.FOLLOWERS, ["alice"])

        with pytest.raises(CategoryLoadError) as exc_info:
            detector.detect_diff(following, followers)

        assert exc_info.value.category is Category.FOLLOWING

    def test_detect_diff_blocks_failed_followers(self, detector):
        """followers が読み込み失敗なら CategoryLoadError"""
        following = create_result(Category.FOLLOWING, ["alice"])
        followers = create_result(Category.FOLLOWERS, [])

        with pytest.raises(CategoryLoadError) as exc_info:
            detector.detect_diff(following, followers)

        assert exc_info.value.category is Category.FOLLOWERS
