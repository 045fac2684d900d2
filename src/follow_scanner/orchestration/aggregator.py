"""カテゴリ単位のエクスポート集約"""

from concurrent.futures import ThreadPoolExecutor
from functools import reduce
from typing import FrozenSet, List, Optional, Sequence, Tuple
import logging

from pydantic import BaseModel, ConfigDict

from ..domain.models import Category, CategoryResult, FileRecord, RelationshipKind
from ..parsers.export_parser import ExportParser, ParsingError
from ..parsers.html_parser import HtmlExportParser
from ..parsers.json_parser import JsonExportParser


class FileOutcome(BaseModel):
    """
    ファイル1件分の処理結果

    identifiers の和集合は可換・結合的なので、ファイルの処理順に依存せず
    同じ最終結果になります。warnings はファイル順に連結されます。
    """
    model_config = ConfigDict(frozen=True)

    identifiers: FrozenSet[str] = frozenset()
    warnings: Tuple[str, ...] = ()

    def merge(self, other: "FileOutcome") -> "FileOutcome":
        """2つの結果をマージした新しい結果を返す"""
        return FileOutcome(
            identifiers=self.identifiers | other.identifiers,
            warnings=self.warnings + other.warnings,
        )


class ExportAggregator:
    """
    1カテゴリに属する複数ファイルを1つの結果に集約

    Responsibilities:
    - ファイルごとの形式判定 (HTML / JSON) とパーサーへの振り分け
    - ファイル単位のデコード失敗の吸収 (警告に変換して続行)
    - 期待カテゴリとの整合性チェック (警告のみ、データは破棄しない)
    - 全ファイルの識別子のマージ

    Instagram はフォロワーを followers_1, followers_2, ... のように
    複数ファイルに分割することがあるため、複数ファイルを受け付けます。
    """

    MARKUP_EXTENSIONS = (".html", ".htm")

    def __init__(
        self,
        json_parser: Optional[ExportParser] = None,
        html_parser: Optional[ExportParser] = None,
        max_workers: int = 1,
    ):
        """
        ExportAggregator を初期化

        Args:
            json_parser: JSON 用パーサー (省略時は JsonExportParser)
            html_parser: HTML 用パーサー (省略時は HtmlExportParser)
            max_workers: ファイルを並列処理するワーカー数 (1 以下なら逐次処理)
        """
        self.json_parser = json_parser or JsonExportParser()
        self.html_parser = html_parser or HtmlExportParser()
        self.max_workers = max_workers
        self.logger = logging.getLogger(__name__)

    def aggregate(
        self, files: Sequence[FileRecord], expected: Category
    ) -> CategoryResult:
        """
        ファイル群を集約

        Args:
            files: 同じカテゴリとして渡されたファイル群
            expected: 呼び出し側が指定したカテゴリ

        Returns:
            CategoryResult: マージ済み識別子とファイル名付き警告
                            (識別子が空なら failed=True)
        """
        outcomes = self._process_all(files, expected)
        merged = reduce(FileOutcome.merge, outcomes, FileOutcome())

        result = CategoryResult(
            category=expected,
            identifiers=sorted(merged.identifiers),
            warnings=list(merged.warnings),
        )

        if result.failed:
            self.logger.error(
                f"No usernames loaded for {expected.value}",
                extra={"file_count": len(files), "warnings_count": len(result.warnings)}
            )
        else:
            self.logger.info(
                f"Loaded {len(result.identifiers)} usernames for {expected.value}",
                extra={"file_count": len(files), "warnings_count": len(result.warnings)}
            )

        return result

    def is_markup(self, record: FileRecord) -> bool:
        """
        ファイルを HTML として扱うか判定

        Returns:
            bool: 内容が '<' で始まる、または拡張子が HTML の場合に True
        """
        if record.raw_text.lstrip("\ufeff").lstrip().startswith("<"):
            return True
        return record.name.lower().endswith(self.MARKUP_EXTENSIONS)

    def _process_all(
        self, files: Sequence[FileRecord], expected: Category
    ) -> List[FileOutcome]:
        """全ファイルを処理 (並列時も入力順で結果を返す)"""
        if self.max_workers <= 1 or len(files) <= 1:
            return [self._process_file(record, expected) for record in files]

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            return list(executor.map(lambda r: self._process_file(r, expected), files))

    def _process_file(self, record: FileRecord, expected: Category) -> FileOutcome:
        """
        ファイル1件を処理

        Args:
            record: 対象ファイル
            expected: 呼び出し側が指定したカテゴリ

        Returns:
            FileOutcome: このファイルの識別子と警告
        """
        # デコードに失敗したファイルは置換文字入りの識別子を混入させない
        if record.decode_error is not None:
            self.logger.warning(
                f"Skipping undecodable file: {record.name}",
                extra={"error": record.decode_error}
            )
            return FileOutcome(
                warnings=(
                    f'"{record.name}": could not be decoded as UTF-8. '
                    "Make sure you upload the original file from the ZIP.",
                )
            )

        markup = self.is_markup(record)
        parser = self.html_parser if markup else self.json_parser

        try:
            parsed = parser.parse_text(record.raw_text)
        except ParsingError as e:
            self.logger.warning(
                f"Failed to parse file: {record.name}",
                extra={"format": parser.format_name, "error": str(e)}
            )
            return FileOutcome(
                warnings=(
                    f'"{record.name}": could not be parsed as JSON. '
                    "Make sure you upload the original *.json file from the ZIP.",
                )
            )

        warnings: List[str] = []

        # パーサーが別カテゴリを検出した場合は警告のみ (識別子はマージする)
        if parsed.kind != RelationshipKind.UNKNOWN and parsed.kind.value != expected.value:
            warnings.append(
                f'"{record.name}": looks like "{parsed.kind.value}" but was loaded as '
                f'"{expected.value}". Usernames were still merged.'
            )

        # HTML はファイル名のみが手がかり
        if markup and expected.opposite.value in record.name.lower():
            warnings.append(
                f'"{record.name}": the file name suggests "{expected.opposite.value}" '
                f'but it was loaded as "{expected.value}".'
            )

        warnings.extend(f'"{record.name}": {w}' for w in parsed.warnings)

        self.logger.debug(
            f"Parsed {record.name}",
            extra={
                "format": parser.format_name,
                "kind": parsed.kind.value,
                "identifiers_count": len(parsed.identifiers),
            }
        )

        return FileOutcome(
            identifiers=frozenset(parsed.identifiers),
            warnings=tuple(warnings),
        )
