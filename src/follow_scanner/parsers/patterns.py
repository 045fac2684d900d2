"""
ヒューリスティック抽出パターン

エクスポート内のテキストからユーザー名候補を取り出す正規表現群です。
入力は信頼できないテキストのため、すべてのパターンは長さ上限付きの
量指定子のみを使い、入れ子の量指定子を含みません。
"""

import re
from typing import List, Optional

# ユーザー名を構成する文字
_IDENT_CHARS = r"A-Za-z0-9._"
_SEGMENT = rf"([{_IDENT_CHARS}]{{1,30}})(?![{_IDENT_CHARS}])"

# プロフィール URL のパス部分 (/_u/<name> 形式を優先)
_PROFILE_PATH = re.compile(rf"instagram\.com/(?:_u/)?{_SEGMENT}")

# 本文中のプロフィール URL (スキーム必須)
_PROFILE_URL = re.compile(rf"https?://(?:www\.)?instagram\.com/(?:_u/)?{_SEGMENT}")

# '@username' 形式のメンション (メールアドレスの '@' は除外)
_MENTION = re.compile(rf"(?<![{_IDENT_CHARS}])@{_SEGMENT}")

# "value":"username" 形式の断片 (HTML に埋め込まれた JSON)
_VALUE_FRAGMENT = re.compile(r'"value"\s{0,16}:\s{0,16}"([^"]{1,64})"')

# アンカーの表示テキスト中の '@username' または 'username' (URL の一部は除外)
_ANCHOR_TEXT = re.compile(rf"(?<![{_IDENT_CHARS}/-])@?([{_IDENT_CHARS}]{{1,30}})(?![{_IDENT_CHARS}:/])")


def extract_profile_segment(href: str) -> Optional[str]:
    """
    プロフィール URL からユーザー名セグメントを抽出

    例:
    - https://www.instagram.com/_u/thenest_games → "thenest_games"
    - https://www.instagram.com/thenest_games/ → "thenest_games"

    Args:
        href: リンク先 URL

    Returns:
        Optional[str]: ユーザー名 (一致しない場合は None)
    """
    match = _PROFILE_PATH.search(href)
    if match:
        return match.group(1)
    return None


def find_profile_urls(text: str) -> List[str]:
    """テキスト中のすべてのプロフィール URL からユーザー名を抽出"""
    return _PROFILE_URL.findall(text)


def find_mentions(text: str) -> List[str]:
    """テキスト中のすべての '@username' からユーザー名を抽出"""
    return _MENTION.findall(text)


def find_value_fragments(text: str) -> List[str]:
    """テキスト中のすべての "value":"..." 断片の値を抽出"""
    return _VALUE_FRAGMENT.findall(text)


def extract_anchor_text(text: str) -> Optional[str]:
    """
    アンカーの表示テキストからユーザー名を抽出

    最初に現れる独立したトークンを対象とし、'@' は任意です。
    "https://..." のような URL 文字列は一致しません。
    """
    match = _ANCHOR_TEXT.search(text)
    if match:
        return match.group(1)
    return None
