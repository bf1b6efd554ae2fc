"""トークンのパッキングモジュール

リテラルとマッチを8個ずつフラグバイトの後ろにまとめる。
フラグはMSBから順に埋まり、ビット1がマッチ、ビット0がリテラルを表す。
"""

from __future__ import annotations

from ecu_lzss.codec.params import FLAGS_PER_GROUP, LENGTH_BITS, OFFSET_HIGH_MASK

LENGTH_SHIFT: int = 8 - LENGTH_BITS
"""1バイト目で長さを格納する位置（下位2ビットはオフセット上位）"""


def pack_token(offset: int, length: int) -> bytes:
    """オフセットと長さを2バイトのトークンに詰める

    Args:
        offset: 後方距離（0-1023）
        length: 一致長（0-63）

    Returns:
        (length << 2) | (offset >> 8), offset & 0xFF の2バイト
    """
    return bytes(((length << LENGTH_SHIFT) | ((offset >> 8) & OFFSET_HIGH_MASK), offset & 0xFF))


def unpack_token(byte1: int, byte2: int) -> tuple[int, int]:
    """2バイトのトークンを (offset, length) に戻す"""
    offset = byte2 + ((byte1 & OFFSET_HIGH_MASK) << 8)
    length = byte1 >> LENGTH_SHIFT
    return offset, length


class TokenGroup:
    """書き出し待ちの1グループ

    フラグバイトと最大8個のアイテムを蓄積し、flush() で
    フラグバイト、アイテムの順に連結したバイト列を返す。
    """

    def __init__(self) -> None:
        self._flags = 0
        self._flag_pos = 0x80
        self._items = bytearray()
        self._count = 0

    @property
    def count(self) -> int:
        """蓄積済みのアイテム数"""
        return self._count

    @property
    def is_empty(self) -> bool:
        return self._count == 0

    @property
    def is_full(self) -> bool:
        return self._count == FLAGS_PER_GROUP

    @property
    def pending_size(self) -> int:
        """flush() した場合のバイト数（フラグバイト込み）"""
        return len(self._items) + 1

    def add_literal(self, value: int) -> None:
        """リテラルを追加する（フラグビット0）"""
        self._reserve()
        self._items.append(value)
        self._advance()

    def add_match(self, offset: int, length: int) -> None:
        """マッチトークンを追加する（フラグビット1）

        offset=0, length=0 は no-op トークンとして扱われる。
        """
        self._reserve()
        self._items += pack_token(offset, length)
        self._flags |= self._flag_pos
        self._advance()

    def add_noop(self) -> None:
        """no-op トークンを追加する"""
        self.add_match(0, 0)

    def flush(self) -> bytes:
        """グループを書き出してリセットする

        Returns:
            フラグバイトとアイテムを連結したバイト列
        """
        out = bytes((self._flags,)) + bytes(self._items)
        self._flags = 0
        self._flag_pos = 0x80
        self._items = bytearray()
        self._count = 0
        return out

    def _reserve(self) -> None:
        if self.is_full:
            raise OverflowError("トークングループが満杯です")

    def _advance(self) -> None:
        self._count += 1
        self._flag_pos >>= 1
