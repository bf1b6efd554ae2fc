"""マッチ探索モジュール

リファレンスエンコーダと同一のマッチ選択を行う。
一般的なLZSSのような最長一致探索ではなく、オフセット3から昇順に走査し、
厳密に長くなった場合のみ候補を更新する。
"""

from __future__ import annotations

from dataclasses import dataclass

from ecu_lzss.codec.params import MAX_MATCH, MIN_MATCH, WINDOW_SIZE


@dataclass(frozen=True)
class Match:
    """バックリファレンス

    Attributes:
        offset: 現在位置からの後方距離
        length: 一致長
    """

    offset: int
    length: int

    @classmethod
    def none(cls) -> Match:
        """「マッチなし」を表す値を返す"""
        return cls(offset=0, length=0)

    @property
    def found(self) -> bool:
        """符号化可能なマッチかどうか"""
        return self.length >= MIN_MATCH and self.offset >= MIN_MATCH


def find_match(data: bytes | bytearray | memoryview, position: int) -> Match:
    """指定位置から始まるマッチを探す

    Args:
        data: 入力バッファ全体
        position: 探索開始位置

    Returns:
        見つかったマッチ。見つからない場合は Match.none()
    """
    remaining = len(data) - position
    search_limit = min(position, WINDOW_SIZE)
    if search_limit < MIN_MATCH:
        return Match.none()

    # 2を超えなければ符号化しない
    best_length = MIN_MATCH - 1
    best_offset = 0
    first = data[position]

    for offset in range(MIN_MATCH, search_limit + 1):
        candidate = position - offset

        if data[candidate] != first:
            continue

        if (
            best_length < remaining
            and data[position + best_length] != data[candidate + best_length]
        ):
            continue

        max_check = min(remaining, offset)
        match_len = 0
        while match_len < max_check and data[position + match_len] == data[candidate + match_len]:
            match_len += 1

        if match_len > best_length:
            best_length = match_len
            best_offset = offset

        if match_len > MAX_MATCH:
            best_length = MAX_MATCH
            best_offset = offset
            break

    if best_length < MIN_MATCH:
        return Match.none()
    return Match(offset=best_offset, length=min(best_length, MAX_MATCH))
