"""
識別子正規化ロジック

エクスポートから抽出したユーザー名トークンを比較可能な形に正規化します。
Instagram のユーザー名は大文字小文字を区別しないため、小文字化して扱います。
"""

import re
from typing import Iterable, List


class IdentifierNormalizer:
    """
    識別子正規化クラス

    正規化・重複排除・文法チェックの静的メソッドを提供します。
    """

    # ユーザー名の文法: 英数字・ピリオド・アンダースコアの1〜30文字
    IDENTIFIER_PATTERN = re.compile(r"[A-Za-z0-9._]{1,30}")

    # 先頭の空白と '@' の連続
    _LEADING_NOISE = re.compile(r"^[\s@]+")

    @staticmethod
    def normalize(raw: str) -> str:
        """
        トークンを正規化

        前後の空白と先頭の '@' を除去し、小文字化します。
        空文字列が返る場合は「識別子なし」として扱ってください。

        Args:
            raw: 正規化前のトークン

        Returns:
            str: 正規化済み識別子 (空文字列の可能性あり)

        Note:
            先頭の '@' と空白はまとめて除去するため、
            normalize(normalize(x)) == normalize(x) が常に成り立ちます。
        """
        token = IdentifierNormalizer._LEADING_NOISE.sub("", raw)
        return token.rstrip().lower()

    @staticmethod
    def dedupe_sort(tokens: Iterable[str]) -> List[str]:
        """
        正規化・重複排除・昇順ソート

        Args:
            tokens: 正規化前のトークン列

        Returns:
            List[str]: 重複のない正規化済み識別子の昇順リスト
        """
        normalized = {IdentifierNormalizer.normalize(token) for token in tokens}
        normalized.discard("")
        return sorted(normalized)

    @staticmethod
    def is_identifier(token: str) -> bool:
        """トークン全体がユーザー名の文法に一致するか"""
        return IdentifierNormalizer.IDENTIFIER_PATTERN.fullmatch(token) is not None
