"""
リレーションシップエントリー抽出

Instagram エクスポート JSON のエントリー1件からユーザー名を取り出します。

エントリーの例:
    {"string_list_data": [{"value": "user", "href": "...", "timestamp": 123}]}
    {"title": "user", "string_list_data": [{"href": "https://www.instagram.com/_u/user"}]}
"""

from typing import Any, Iterator, Optional

from .patterns import extract_profile_segment
from ..domain.normalizer import IdentifierNormalizer


class EntryExtractor:
    """
    エントリー1件からユーザー名を抽出するクラス

    value → title → href の順にフォールバックし、最初に見つかったものを返します。
    エントリーの形は保証されないため、型を確認してからフィールドを参照します。
    """

    RECORDS_FIELD = "string_list_data"

    @staticmethod
    def extract(entry: Any) -> Optional[str]:
        """
        エントリーからユーザー名を抽出

        Args:
            entry: デコード済み JSON の任意の値

        Returns:
            Optional[str]: ユーザー名 (見つからない場合は None、例外は送出しない)
        """
        if not isinstance(entry, dict):
            return None

        # 多くのエクスポートでは string_list_data[].value にユーザー名が入る
        for record in EntryExtractor._records(entry):
            value = EntryExtractor._non_empty(record.get("value"))
            if value:
                return value

        # value を持たないエクスポート (following.json など) は title にユーザー名が入る
        title = EntryExtractor._non_empty(entry.get("title"))
        if title:
            return title

        # 最後の手段: href のプロフィール URL から抽出
        for record in EntryExtractor._records(entry):
            href = record.get("href")
            if not isinstance(href, str):
                continue
            segment = extract_profile_segment(href)
            if segment and IdentifierNormalizer.is_identifier(segment):
                return segment

        return None

    @staticmethod
    def _records(entry: dict) -> Iterator[dict]:
        """string_list_data 内の辞書型レコードのみを列挙"""
        records = entry.get(EntryExtractor.RECORDS_FIELD)
        if not isinstance(records, list):
            return
        for record in records:
            if isinstance(record, dict):
                yield record

    @staticmethod
    def _non_empty(value: Any) -> Optional[str]:
        """空でない文字列ならそのまま返す (正規化は呼び出し側)"""
        if isinstance(value, str) and value:
            return value
        return None
