"""
JSON エクスポートパーサー

Instagram 公式データダウンロードの JSON からユーザー名を抽出します。

よくある形式:
- followers_1.json: [{"string_list_data": [{"value", "href", "timestamp"}]}, ...]
  または {"relationships_followers": [...]}
- following.json: {"relationships_following": [{"title", "string_list_data": [...]}]}
"""

import json
import logging
from typing import Any, List, Optional, Tuple

from .entry_extractor import EntryExtractor
from .export_parser import ExportParser, ParsingError
from ..domain.models import ParseResult, RelationshipKind
from ..domain.normalizer import IdentifierNormalizer


logger = logging.getLogger(__name__)


class JsonExportParser(ExportParser):
    """
    JSON エクスポート向けパーサー

    スキーマは保証されないため、各段階で値の型を確認してから参照します。
    """

    format_name = "json"

    FOLLOWERS_KEY = "relationships_followers"
    FOLLOWING_KEY = "relationships_following"
    RELATIONSHIPS_PREFIX = "relationships_"

    def parse_text(self, text: str) -> ParseResult:
        """
        JSON テキストをデコードしてパース

        Args:
            text: ファイル内容

        Returns:
            ParseResult: 抽出結果

        Raises:
            ParsingError: JSON としてデコードできない時
        """
        try:
            data = json.loads(text.lstrip("\ufeff"))
        except (ValueError, RecursionError) as e:
            raise ParsingError(f"JSON のデコードに失敗しました: {e}") from e
        return self.parse(data)

    def parse(self, data: Any) -> ParseResult:
        """
        デコード済み JSON から種別とユーザー名を抽出

        判定順:
        1. relationships_followers 配列 → followers
        2. relationships_following 配列 → following
        3. その他の relationships_* 配列 (キーの辞書順で最初に抽出できたもの) → unknown
        4. トップレベルが配列 → unknown
        5. いずれにも該当しない → unknown (空、警告付き)

        Args:
            data: デコード済み JSON

        Returns:
            ParseResult: 抽出結果
        """
        if isinstance(data, dict):
            for key, kind in (
                (self.FOLLOWERS_KEY, RelationshipKind.FOLLOWERS),
                (self.FOLLOWING_KEY, RelationshipKind.FOLLOWING),
            ):
                entries = data.get(key)
                if isinstance(entries, list):
                    return self._build_result(
                        kind,
                        self._extract_all(entries),
                        f"Detected {kind.value}, but no usernames could be extracted.",
                    )

            found = self._scan_nonstandard_keys(data)
            if found:
                key, identifiers = found
                logger.info(f"Using non-standard relationships key: {key}")
                return ParseResult(
                    kind=RelationshipKind.UNKNOWN,
                    identifiers=identifiers,
                    warnings=[f'Non-standard format: usernames were extracted from "{key}".'],
                )

        if isinstance(data, list):
            return self._build_result(
                RelationshipKind.UNKNOWN,
                self._extract_all(data),
                f"Detected {RelationshipKind.UNKNOWN.value} (top-level array), but no usernames could be extracted.",
            )

        return ParseResult(
            kind=RelationshipKind.UNKNOWN,
            warnings=["Unrecognized format: not a followers/following export."],
        )

    def _scan_nonstandard_keys(self, data: dict) -> Optional[Tuple[str, List[str]]]:
        """
        relationships_* で始まる配列フィールドを辞書順に走査

        Returns:
            Optional[Tuple[str, List[str]]]: 最初に1件以上抽出できたキーと正規化済み識別子
        """
        # JSON 由来でない辞書では文字列以外のキーもあり得る
        for key in sorted(k for k in data if isinstance(k, str)):
            if not key.startswith(self.RELATIONSHIPS_PREFIX):
                continue
            value = data[key]
            if not isinstance(value, list):
                continue
            identifiers = IdentifierNormalizer.dedupe_sort(self._extract_all(value))
            if identifiers:
                return key, identifiers
        return None

    @staticmethod
    def _extract_all(entries: List[Any]) -> List[str]:
        """全エントリーに抽出を適用し、抽出できなかったものを除外"""
        identifiers = []
        for entry in entries:
            identifier = EntryExtractor.extract(entry)
            if identifier is not None:
                identifiers.append(identifier)
        return identifiers

    @staticmethod
    def _build_result(
        kind: RelationshipKind, identifiers: List[str], empty_warning: str
    ) -> ParseResult:
        """抽出結果を正規化し、空の場合は警告を付与"""
        normalized = IdentifierNormalizer.dedupe_sort(identifiers)
        warnings = [] if normalized else [empty_warning]
        return ParseResult(kind=kind, identifiers=normalized, warnings=warnings)
