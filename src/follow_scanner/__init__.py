"""
follow-scanner

Instagram 公式データダウンロード (JSON / HTML) からフォロワー・フォロー中を抽出し、
フォローバックされていないアカウントを算出します。ログインやスクレイピングは行いません。
"""
