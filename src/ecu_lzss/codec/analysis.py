"""圧縮ストリーム解析モジュール"""

from __future__ import annotations

from dataclasses import dataclass

from ecu_lzss.codec.decoder import TokenKind, TokenParser
from ecu_lzss.codec.params import ALIGNMENT, MIN_MATCH


@dataclass(frozen=True)
class StreamStats:
    """圧縮ストリームの統計"""

    compressed_size: int
    groups: int
    literals: int
    matches: int
    noops: int
    decoded_size: int
    max_offset: int
    max_length: int
    short_offsets: int
    trailing_bytes: int

    @property
    def aligned(self) -> bool:
        """圧縮サイズが16バイト境界に揃っているか"""
        return self.compressed_size % ALIGNMENT == 0

    @property
    def ratio(self) -> float:
        """圧縮率（圧縮サイズ / 解凍サイズ）"""
        if self.decoded_size == 0:
            return 0.0
        return self.compressed_size / self.decoded_size


def analyze_stream(data: bytes) -> StreamStats:
    """圧縮ストリームを走査して統計を集計する

    ウィンドウの再生は行わず、トークンの種別と長さのみを数える。
    末尾のゼロ埋めはリテラルとして数えられる点に注意。

    Args:
        data: 圧縮データ

    Returns:
        ストリーム統計
    """
    parser = TokenParser(data)
    literals = matches = noops = decoded = 0
    max_offset = max_length = short_offsets = 0

    for token in parser:
        match token.kind:
            case TokenKind.LITERAL:
                literals += 1
                decoded += 1
            case TokenKind.MATCH:
                matches += 1
                decoded += token.length
                max_offset = max(max_offset, token.offset)
                max_length = max(max_length, token.length)
                # リファレンスエンコーダはオフセット3未満を出力しない
                if token.offset < MIN_MATCH:
                    short_offsets += 1
            case TokenKind.NOOP:
                noops += 1

    return StreamStats(
        compressed_size=len(data),
        groups=parser.groups,
        literals=literals,
        matches=matches,
        noops=noops,
        decoded_size=decoded,
        max_offset=max_offset,
        max_length=max_length,
        short_offsets=short_offsets,
        trailing_bytes=len(data) - parser.position,
    )
