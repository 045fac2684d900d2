"""
データモデル定義

このモジュールは follow-scanner のドメイン層のデータモデルを定義します:
- Category / RelationshipKind: 利用者が指定するカテゴリとパーサーが検出した種別
- FileRecord: エクスポートファイル1件分の入力 (ファイル名 + テキスト)
- ParseResult: パーサー1回分の抽出結果
- CategoryResult: 1カテゴリ分の集約結果
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field, field_validator


class Category(str, Enum):
    """利用者がファイルに対して指定するカテゴリ"""
    FOLLOWERS = "followers"
    FOLLOWING = "following"

    @property
    def opposite(self) -> "Category":
        """もう一方のカテゴリ"""
        if self is Category.FOLLOWERS:
            return Category.FOLLOWING
        return Category.FOLLOWERS


class RelationshipKind(str, Enum):
    """パーサーがファイル内容から検出した種別"""
    FOLLOWERS = "followers"
    FOLLOWING = "following"
    UNKNOWN = "unknown"


def _ensure_unique_sorted(identifiers: List[str]) -> List[str]:
    """
    識別子リストが重複なし・昇順であることを検証

    Raises:
        ValueError: 重複または順序違反がある場合
    """
    if list(identifiers) != sorted(set(identifiers)):
        raise ValueError(
            "identifiers は重複のない昇順リストである必要があります"
        )
    return identifiers


class FileRecord(BaseModel):
    """
    エクスポートファイル1件分の入力

    ファイル読み込みは呼び出し側の責務で、コアには完全なテキストが渡されます。
    """

    name: str = Field(..., description="ファイル名 (判定・警告メッセージ用)")
    raw_text: str = Field(..., description="ファイル内容 (デコード済みテキスト)")
    decode_error: Optional[str] = Field(
        None, description="文字コードのデコードに失敗した場合のエラー内容"
    )


class ParseResult(BaseModel):
    """
    パーサー1回分の抽出結果

    identifiers は正規化済みで、重複なし・昇順であることが保証されます。
    """

    kind: RelationshipKind = Field(
        default=RelationshipKind.UNKNOWN, description="検出した種別"
    )
    identifiers: List[str] = Field(
        default_factory=list, description="正規化済み識別子 (昇順)"
    )
    warnings: List[str] = Field(default_factory=list, description="警告メッセージ")

    @field_validator("identifiers")
    @classmethod
    def validate_identifiers(cls, v: List[str]) -> List[str]:
        """識別子リストの一意性・昇順バリデーション"""
        return _ensure_unique_sorted(v)


class CategoryResult(BaseModel):
    """
    1カテゴリ分の集約結果

    複数ファイルの識別子をマージした結果です。マージ後に識別子が空の場合は
    failed が True となり、差分計算に渡してはいけません。
    """

    category: Category = Field(..., description="呼び出し側が指定したカテゴリ")
    identifiers: List[str] = Field(
        default_factory=list, description="全ファイルをマージした識別子 (昇順)"
    )
    warnings: List[str] = Field(
        default_factory=list, description="ファイル名付き警告 (ファイル順)"
    )

    @field_validator("identifiers")
    @classmethod
    def validate_identifiers(cls, v: List[str]) -> List[str]:
        """識別子リストの一意性・昇順バリデーション"""
        return _ensure_unique_sorted(v)

    @computed_field
    @property
    def failed(self) -> bool:
        """カテゴリの読み込みに失敗したか (識別子が1件もない)"""
        return not self.identifiers
