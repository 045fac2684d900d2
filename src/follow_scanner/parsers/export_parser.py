"""
エクスポートパーサー抽象基底クラス

JSON / HTML などエクスポート形式ごとの差異を吸収するための抽象インターフェースを
定義します。新しい形式に対応する場合は、このクラスを継承して具象パーサーを実装します。
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..domain.models import ParseResult


class ParsingError(Exception):
    """
    パースエラー例外

    エクスポートファイルをデコードできない場合などを表します。
    集約処理ではファイル単位で捕捉され、警告に変換されます。
    """

    def __init__(self, message: str, source: Optional[str] = None):
        """
        Args:
            message: エラーメッセージ
            source: エラーが発生したファイル名（わかる場合）
        """
        super().__init__(message)
        self.source = source


class ExportParser(ABC):
    """
    エクスポート形式別パーサー抽象基底クラス

    ファイル内容 (テキスト) を受け取り、検出した種別・正規化済み識別子・警告を
    ParseResult として返します。
    """

    # 警告メッセージ等に使う形式名
    format_name: str = ""

    @abstractmethod
    def parse_text(self, text: str) -> ParseResult:
        """
        ファイル内容をパース

        Args:
            text: ファイル内容

        Returns:
            ParseResult: 抽出結果

        Raises:
            ParsingError: 内容をデコードできない時
        """
        pass
