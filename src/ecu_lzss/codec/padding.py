"""パディングモジュール

圧縮データ末尾を16バイト境界に揃える3つのモードを提供する。

- DEFAULT: 最終グループの後ろに0x00を追加する
- NO_PAD: 何も追加しない
- EXACT_PAD: デコード時に出力を生まない no-op トークンで埋める
"""

from __future__ import annotations

from enum import Enum

from ecu_lzss.codec.packer import TokenGroup
from ecu_lzss.codec.params import ALIGNMENT

PADDING_LENGTHS: tuple[int, ...] = (
    0x00, 0x01, 0x12, 0x03, 0x14, 0x05, 0x16, 0x07, 0x18,
    0x09, 0x1A, 0x0B, 0x1C, 0x0D, 0x1E, 0x0F, 0x00,
)  # fmt: skip
"""境界までの不足バイト数（0-16）から追加する no-op バイト数への対応表"""

PADDING_BLOCK: bytes = b"\xff" + b"\x00" * 16
"""no-op パディングの繰り返し単位（全ビットマッチのフラグ + 8個の0/0トークン）"""


class PaddingMode(Enum):
    """パディングモード"""

    DEFAULT = "default"
    NO_PAD = "no-pad"
    EXACT_PAD = "exact-pad"


def fill_open_group(group: TokenGroup, flushed_size: int) -> int:
    """未書き出しの最終グループを no-op トークンで埋める

    グループに空きがあり、書き出し後のサイズが境界に揃わない間だけ追加する。
    トークンは2バイト単位なので、奇数バイト足りない場合はグループが満杯になるまで埋まる。

    Args:
        group: 最終グループ
        flushed_size: 既に書き出したバイト数

    Returns:
        追加した no-op トークン数
    """
    added = 0
    while (flushed_size + group.pending_size) % ALIGNMENT != 0:
        if group.is_full:
            break
        group.add_noop()
        added += 1
    return added


def exact_trailer(size: int) -> bytes:
    """EXACT_PAD 用の末尾ブロックを生成する

    Args:
        size: ここまでの圧縮サイズ

    Returns:
        PADDING_BLOCK を繰り返して切り出した no-op バイト列
    """
    count = PADDING_LENGTHS[ALIGNMENT - (size % ALIGNMENT)]
    return bytes(PADDING_BLOCK[i % len(PADDING_BLOCK)] for i in range(count))


def zero_trailer(size: int) -> bytes:
    """DEFAULT 用のゼロ埋めを生成する"""
    return b"\x00" * (-size % ALIGNMENT)
