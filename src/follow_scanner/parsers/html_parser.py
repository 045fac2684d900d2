"""
HTML エクスポートパーサー

Instagram のデータダウンロードで HTML 形式を選んだ場合の
followers_1.html / following.html などからユーザー名を抽出します。

HTML にはカテゴリを判別できる確かな手がかりがないため、検出種別は常に unknown です。
スクリプトは実行せず、以下から候補を収集します:
- https://www.instagram.com/<username>/ 形式の URL
- '@username' 形式のテキスト
- "value":"username" 形式の断片 (HTML に埋め込まれた JSON)
- アンカー要素のリンク先と表示テキスト (ツリー構築が可能な場合のみ)
"""

import logging
from typing import Any, Callable, List, Optional

from bs4 import BeautifulSoup

from .export_parser import ExportParser
from .patterns import (
    extract_anchor_text,
    extract_profile_segment,
    find_mentions,
    find_profile_urls,
    find_value_fragments,
)
from ..domain.models import ParseResult, RelationshipKind
from ..domain.normalizer import IdentifierNormalizer


logger = logging.getLogger(__name__)

# HTML テキストから要素ツリーを構築する関数。
# 戻り値は find_all("a") と、要素の get("href") / get_text() に対応していること。
TreeBuilder = Callable[[str], Any]


def build_soup(text: str) -> BeautifulSoup:
    """BeautifulSoup (html.parser) で要素ツリーを構築"""
    return BeautifulSoup(text, "html.parser")


class HtmlExportParser(ExportParser):
    """
    HTML エクスポート向けヒューリスティックパーサー

    テキストパターンによる抽出に加え、ツリー構築関数が与えられていれば
    アンカー要素を走査する追加パスを実行します。追加パスが使えない・失敗した場合は
    警告なしでテキストパターンの結果のみを返します。
    """

    format_name = "html"

    MARKUP_NOTICE = "The file was imported as HTML (Instagram export in HTML format)."
    EMPTY_NOTICE = (
        "No usernames could be extracted from the HTML. "
        "If Instagram lets you choose the format, try JSON instead."
    )

    def __init__(self, tree_builder: Optional[TreeBuilder] = build_soup):
        """
        Args:
            tree_builder: 要素ツリー構築関数。None の場合はアンカー走査を行わない
        """
        self.tree_builder = tree_builder

    def parse_text(self, text: str) -> ParseResult:
        """
        HTML テキストからユーザー名を抽出

        Args:
            text: ファイル内容

        Returns:
            ParseResult: 抽出結果 (kind は常に unknown)
        """
        warnings = [self.MARKUP_NOTICE]

        candidates: List[str] = []
        candidates.extend(find_profile_urls(text))
        candidates.extend(find_mentions(text))
        candidates.extend(find_value_fragments(text))
        candidates.extend(self._collect_from_anchors(text))

        # ユーザー名の文法に一致するものだけを残す
        plausible = [c for c in candidates if IdentifierNormalizer.is_identifier(c)]
        identifiers = IdentifierNormalizer.dedupe_sort(plausible)

        if not identifiers:
            warnings.append(self.EMPTY_NOTICE)

        return ParseResult(
            kind=RelationshipKind.UNKNOWN,
            identifiers=identifiers,
            warnings=warnings,
        )

    def _collect_from_anchors(self, text: str) -> List[str]:
        """
        アンカー要素のリンク先と表示テキストから候補を収集

        HTML にプレーンテキストの URL が含まれない場合の取りこぼしを補います。

        Returns:
            List[str]: 候補リスト (ツリー構築不可・失敗時は空)
        """
        if self.tree_builder is None:
            return []

        candidates: List[str] = []
        try:
            tree = self.tree_builder(text)
            for anchor in tree.find_all("a"):
                href = anchor.get("href") or ""
                if isinstance(href, str):
                    segment = extract_profile_segment(href)
                    if segment:
                        candidates.append(segment)

                anchor_text = extract_anchor_text((anchor.get_text() or "").strip())
                if anchor_text:
                    candidates.append(anchor_text)
        except Exception as e:
            # テキストパターンの結果のみで続行
            logger.debug(f"Anchor pass skipped: {e}")
            return []

        return candidates
