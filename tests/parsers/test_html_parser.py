"""
HtmlExportParser のユニットテスト

モック HTML を使用してヒューリスティック抽出と、要素ツリー構築が使えない場合の
縮退動作を検証します。
"""
import pytest
from unittest.mock import Mock

from src.follow_scanner.parsers.export_parser import ExportParser
from src.follow_scanner.parsers.html_parser import HtmlExportParser, build_soup
from src.follow_scanner.domain.models import RelationshipKind


# モック HTML データ（Instagram の HTML エクスポート構造に基づく）
MOCK_FOLLOWERS_HTML = """
<!DOCTYPE html>
<html>
<head><title>Followers</title></head>
<body>
    <main>
        <div class="pam _3-95 _2ph- _a6-g uiBoxWhite noborder">
            <div class="_a6-p"><div><div>
                <a target="_blank" href="https://www.instagram.com/alice">alice</a>
            </div><div>Jan 05, 2026 10:00 am</div></div></div>
        </div>
        <div class="pam _3-95 _2ph- _a6-g uiBoxWhite noborder">
            <div class="_a6-p"><div><div>
                <a target="_blank" href="https://www.instagram.com/Bob.Smith">Bob.Smith</a>
            </div><div>Jan 06, 2026 11:00 am</div></div></div>
        </div>
    </main>
</body>
</html>
"""

# リンク先が相対パスで、本文に URL が現れない HTML
MOCK_ANCHOR_ONLY_HTML = """
<html><body>
    <a href="/carol/">@carol</a>
    <a href="#">https://example.com/not-a-user</a>
</body></html>
"""

MOCK_EMPTY_HTML = """
<html><head><title>Nothing here</title></head><body><p>- - -</p></body></html>
"""


@pytest.fixture
def parser():
    return HtmlExportParser()


class TestHtmlExportParserInitialization:
    """初期化のテスト"""

    def test_inherits_export_parser(self):
        """ExportParser を継承すること"""
        assert issubclass(HtmlExportParser, ExportParser)

    def test_default_tree_builder(self):
        """デフォルトで BeautifulSoup のツリー構築を使うこと"""
        assert HtmlExportParser().tree_builder is build_soup


class TestTextPatterns:
    """テキストパターンによる抽出のテスト"""

    def test_mixed_text_sources(self, parser):
        """URL・メンション・value 断片の和集合を返すこと"""
        text = 'Visit https://instagram.com/Dave/ and @erin and "value":"Frank"'
        result = parser.parse_text(text)
        assert result.kind == RelationshipKind.UNKNOWN
        assert result.identifiers == ["dave", "erin", "frank"]

    def test_followers_html_export(self, parser):
        """HTML エクスポートから抽出すること"""
        result = parser.parse_text(MOCK_FOLLOWERS_HTML)
        assert result.identifiers == ["alice", "bob.smith"]
        assert result.kind == RelationshipKind.UNKNOWN

    def test_u_path_in_markup(self, parser):
        """/_u/ 形式の URL から '_u' ではなくユーザー名を抽出すること"""
        result = parser.parse_text('<p>https://www.instagram.com/_u/gina/</p>')
        assert result.identifiers == ["gina"]

    def test_invalid_value_fragments_filtered(self, parser):
        """文法に合わない value 断片は除外されること"""
        result = parser.parse_text('"value":"not a username" "value":"ok_user"')
        assert result.identifiers == ["ok_user"]

    def test_first_warning_is_markup_notice(self, parser):
        """警告の先頭は常に HTML として読み込んだ旨の通知"""
        result = parser.parse_text(MOCK_FOLLOWERS_HTML)
        assert result.warnings == [HtmlExportParser.MARKUP_NOTICE]

    def test_empty_result_warnings(self, parser):
        """抽出できない場合は JSON を勧める警告が追加されること"""
        result = parser.parse_text(MOCK_EMPTY_HTML)
        assert result.identifiers == []
        assert result.warnings == [
            HtmlExportParser.MARKUP_NOTICE,
            HtmlExportParser.EMPTY_NOTICE,
        ]
        assert "JSON" in result.warnings[1]


class TestAnchorPass:
    """アンカー走査のテスト"""

    def test_anchor_pass_adds_candidates(self, parser):
        """アンカーの表示テキストから抽出すること"""
        result = parser.parse_text(MOCK_ANCHOR_ONLY_HTML)
        assert "carol" in result.identifiers
        assert "https" not in result.identifiers

    def test_anchor_text_not_at_start(self, parser):
        """表示テキストの先頭が記号でもユーザー名を抽出すること"""
        result = parser.parse_text('<a href="/x/y">&rarr; alice</a>')
        assert result.identifiers == ["alice"]

    def test_without_tree_builder(self):
        """ツリー構築なしでもテキストパターンの結果を返すこと (警告なし)"""
        parser = HtmlExportParser(tree_builder=None)
        result = parser.parse_text(MOCK_FOLLOWERS_HTML)
        assert result.identifiers == ["alice", "bob.smith"]
        assert result.warnings == [HtmlExportParser.MARKUP_NOTICE]

    def test_tree_builder_failure_is_silent(self):
        """ツリー構築が失敗しても例外・警告にならないこと"""
        failing = Mock(side_effect=RuntimeError("no DOM available"))
        parser = HtmlExportParser(tree_builder=failing)

        result = parser.parse_text('<a href="x">@hank</a> https://instagram.com/ivy')

        failing.assert_called_once()
        assert result.identifiers == ["hank", "ivy"]
        assert result.warnings == [HtmlExportParser.MARKUP_NOTICE]

    def test_anchor_pass_only_difference(self):
        """アンカー走査の有無で差が出る入力"""
        html = '<a href="https://www.instagram.com/jules">profile</a>'
        without = HtmlExportParser(tree_builder=None).parse_text(html)
        with_tree = HtmlExportParser().parse_text(html)
        assert without.identifiers == ["jules"]
        assert with_tree.identifiers == ["jules", "profile"]
