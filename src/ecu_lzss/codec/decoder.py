"""LZSS解凍モジュール

フラグバイトをMSBから1ビットずつ消費し、リテラルまたはマッチトークンを読み出す。
ストリームに終端マーカーは無く、入力が尽きた時点で解凍を終了する。
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from ecu_lzss.codec.packer import unpack_token
from ecu_lzss.codec.params import FLAGS_PER_GROUP, TOKEN_BYTES
from ecu_lzss.codec.window import SlidingWindow


class TokenKind(Enum):
    """トークン種別"""

    LITERAL = "literal"
    MATCH = "match"
    NOOP = "noop"


@dataclass(frozen=True)
class Token:
    """解析済みトークン

    Attributes:
        kind: トークン種別
        value: リテラル値（LITERAL のみ）
        offset: 後方距離（MATCH / NOOP）
        length: 一致長（MATCH / NOOP）
    """

    kind: TokenKind
    value: int = 0
    offset: int = 0
    length: int = 0


class TokenParser:
    """圧縮ストリームのトークン列を読み出す

    フラグバイト、リテラル、トークンのいずれかを読む途中で入力が尽きた場合、
    エラーにせずイテレーションを終了する。終了後の position は最後に
    完全に読み出したトークンの直後を指す。
    """

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = data
        self._position = 0
        self._groups = 0

    @property
    def position(self) -> int:
        """最後に読み出したトークン直後の入力位置"""
        return self._position

    @property
    def groups(self) -> int:
        """読み出したフラグバイト数"""
        return self._groups

    def __iter__(self) -> Iterator[Token]:
        data = self._data
        size = len(data)
        pos = 0
        flags = 0
        used = FLAGS_PER_GROUP - 1

        while True:
            flags = (flags << 1) & 0xFF
            used += 1

            if used == FLAGS_PER_GROUP:
                if pos >= size:
                    return
                flags = data[pos]
                pos += 1
                used = 0
                self._groups += 1
                self._position = pos

            if flags & 0x80 == 0:
                if pos >= size:
                    return
                token = Token(kind=TokenKind.LITERAL, value=data[pos])
                pos += 1
            else:
                if pos + TOKEN_BYTES > size:
                    return
                offset, length = unpack_token(data[pos], data[pos + 1])
                pos += TOKEN_BYTES
                kind = TokenKind.NOOP if length == 0 else TokenKind.MATCH
                token = Token(kind=kind, offset=offset, length=length)

            self._position = pos
            yield token


class LZSSDecoder:
    """LZSS解凍クラス

    ウィンドウは呼び出しごとに生成し、0x11で初期化する。
    """

    def decode(self, data: bytes, output_size: int | None = None) -> bytes:
        """LZSS圧縮データを解凍する

        出力サイズを指定した場合は、そのサイズに達した時点で打ち切る。
        exact-pad で圧縮されたデータは no-op トークンのみで埋められているため、
        元のサイズを指定すれば余分なバイトは出力されない。

        Args:
            data: LZSS圧縮されたバイト列
            output_size: 出力の上限サイズ（Noneの場合は入力が尽きるまで）

        Returns:
            解凍されたバイト列

        Raises:
            ValueError: output_size が負の場合
        """
        if output_size is not None and output_size < 0:
            raise ValueError(f"出力サイズが不正です: {output_size}")
        if output_size == 0:
            return b""

        output = bytearray()
        window = SlidingWindow()

        for token in TokenParser(data):
            match token.kind:
                case TokenKind.LITERAL:
                    window.push(token.value)
                    output.append(token.value)
                case TokenKind.MATCH:
                    output += window.copy(token.offset, token.length)
                case TokenKind.NOOP:
                    continue

            if output_size is not None and len(output) >= output_size:
                del output[output_size:]
                break

        return bytes(output)


def decompress(data: bytes, output_size: int | None = None) -> bytes:
    """圧縮データを解凍する"""
    return LZSSDecoder().decode(data, output_size)
