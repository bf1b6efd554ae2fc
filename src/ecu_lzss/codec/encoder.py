"""LZSS圧縮モジュール

入力全体をメモリに読み込み、各位置で find_match() の結果に従って
リテラルまたはマッチを出力する。
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ecu_lzss.codec.match import find_match
from ecu_lzss.codec.packer import TokenGroup
from ecu_lzss.codec.padding import PaddingMode, exact_trailer, fill_open_group, zero_trailer
from ecu_lzss.errors import AllocationFailure


@dataclass
class EncodeStatistics:
    """圧縮統計

    Attributes:
        literals: リテラル数
        matches: マッチトークン数
        noops: パディング用 no-op トークン数（末尾ブロック分を除く）
        groups: 書き出したグループ数（末尾ブロック分を除く）
        padding_bytes: 最終グループの後ろに追加したバイト数
    """

    literals: int = 0
    matches: int = 0
    noops: int = 0
    groups: int = 0
    padding_bytes: int = 0


@dataclass(frozen=True)
class EncodeResult:
    """圧縮結果

    Attributes:
        data: 圧縮データ
        input_size: 入力サイズ
        padding: 使用したパディングモード
        statistics: 圧縮統計
    """

    data: bytes
    input_size: int
    padding: PaddingMode
    statistics: EncodeStatistics = field(default_factory=EncodeStatistics)

    @property
    def compressed_size(self) -> int:
        return len(self.data)


class LZSSEncoder:
    """LZSS圧縮クラス

    使用例:
        >>> encoder = LZSSEncoder(PaddingMode.DEFAULT)
        >>> result = encoder.encode(firmware)
        >>> result.compressed_size % 16
        0
    """

    def __init__(self, padding: PaddingMode = PaddingMode.DEFAULT) -> None:
        """エンコーダを初期化する

        Args:
            padding: パディングモード
        """
        self._padding = padding

    @property
    def padding(self) -> PaddingMode:
        return self._padding

    def encode(self, data: bytes | bytearray | memoryview) -> EncodeResult:
        """データを圧縮する

        Args:
            data: 圧縮対象

        Returns:
            圧縮結果

        Raises:
            AllocationFailure: 入力バッファを確保できなかった場合
        """
        try:
            buffer = bytes(data)
        except MemoryError as e:
            raise AllocationFailure("入力バッファの確保に失敗しました") from e

        stats = EncodeStatistics()
        if not buffer:
            return EncodeResult(data=b"", input_size=0, padding=self._padding, statistics=stats)

        out = bytearray()
        group = TokenGroup()
        position = 0
        size = len(buffer)

        while position < size:
            match = find_match(buffer, position)
            if match.found:
                group.add_match(match.offset, match.length)
                stats.matches += 1
                position += match.length
            else:
                group.add_literal(buffer[position])
                stats.literals += 1
                position += 1

            if group.is_full:
                out += group.flush()
                stats.groups += 1

        if not group.is_empty:
            if self._padding is PaddingMode.EXACT_PAD:
                stats.noops += fill_open_group(group, len(out))
            out += group.flush()
            stats.groups += 1

        unpadded = len(out)
        if self._padding is PaddingMode.EXACT_PAD:
            out += exact_trailer(len(out))
        if self._padding is not PaddingMode.NO_PAD:
            out += zero_trailer(len(out))
        stats.padding_bytes = len(out) - unpadded

        return EncodeResult(
            data=bytes(out),
            input_size=size,
            padding=self._padding,
            statistics=stats,
        )


def compress(
    data: bytes | bytearray | memoryview, padding: PaddingMode = PaddingMode.DEFAULT
) -> bytes:
    """データを圧縮して圧縮バイト列のみを返す"""
    return LZSSEncoder(padding).encode(data).data
