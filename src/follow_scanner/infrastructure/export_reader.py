"""
エクスポートリーダー

ディスク上のエクスポートファイル、または Instagram のデータダウンロード ZIP から
FileRecord を読み込みます。
"""

import logging
import re
import zipfile
from pathlib import Path, PurePosixPath
from typing import Dict, Iterable, List, Optional, Union

from ..domain.models import Category, FileRecord


logger = logging.getLogger(__name__)


class ExportReader:
    """
    エクスポートファイル読み込み

    バイト列を UTF-8 (BOM 許容) でデコードします。デコードできないバイトは置換文字に
    置き換え、判定はパーサー側 (ファイル単位の警告) に任せます。
    """

    ENCODING = "utf-8-sig"

    # ZIP 内のファイル名パターン (例: followers_1.json, following.html)
    ARCHIVE_PATTERNS = {
        Category.FOLLOWERS: re.compile(r"^followers(?:_\d{1,4})?\.(?:json|html?)$", re.IGNORECASE),
        Category.FOLLOWING: re.compile(r"^following(?:_\d{1,4})?\.(?:json|html?)$", re.IGNORECASE),
    }

    def read_files(self, paths: Iterable[Union[str, Path]]) -> List[FileRecord]:
        """
        ファイル群を読み込み

        Args:
            paths: 読み込むファイルパス

        Returns:
            List[FileRecord]: 入力順の FileRecord リスト

        Raises:
            FileNotFoundError: ファイルが存在しない場合
        """
        records = []
        for path in paths:
            path = Path(path)
            records.append(self._decode(path.name, path.read_bytes()))
        return records

    def read_archive(self, zip_path: Union[str, Path]) -> Dict[Category, List[FileRecord]]:
        """
        データダウンロード ZIP からフォロワー・フォロー中のファイルを抽出

        ZIP 内のディレクトリ構成はエクスポートのバージョンによって異なるため、
        ファイル名 (basename) のみで判定します。

        Args:
            zip_path: ZIP ファイルパス

        Returns:
            Dict[Category, List[FileRecord]]: カテゴリ別の FileRecord リスト (名前順)

        Raises:
            FileNotFoundError: ファイルが存在しない場合
            zipfile.BadZipFile: ZIP として読み込めない場合
        """
        found: Dict[Category, List[FileRecord]] = {
            Category.FOLLOWERS: [],
            Category.FOLLOWING: [],
        }

        with zipfile.ZipFile(zip_path) as archive:
            for member in sorted(archive.namelist()):
                if member.endswith("/"):
                    continue
                name = PurePosixPath(member).name
                category = self.classify_name(name)
                if category is None:
                    continue
                found[category].append(self._decode(name, archive.read(member)))

        logger.info(
            f"Read archive: {zip_path}",
            extra={
                "followers_files": len(found[Category.FOLLOWERS]),
                "following_files": len(found[Category.FOLLOWING])
            }
        )
        return found

    def classify_name(self, name: str) -> Optional[Category]:
        """
        ファイル名からカテゴリを判定

        Returns:
            Optional[Category]: 該当カテゴリ (対象外のファイルは None)
        """
        for category, pattern in self.ARCHIVE_PATTERNS.items():
            if pattern.match(name):
                return category
        return None

    def _decode(self, name: str, data: bytes) -> FileRecord:
        """バイト列を FileRecord に変換"""
        try:
            return FileRecord(name=name, raw_text=data.decode(self.ENCODING))
        except UnicodeDecodeError as e:
            logger.warning(f"File is not valid UTF-8: {name}", extra={"error": str(e)})
            return FileRecord(
                name=name,
                raw_text=data.decode(self.ENCODING, errors="replace"),
                decode_error=str(e),
            )
