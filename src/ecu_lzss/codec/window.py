"""デコード側スライディングウィンドウ

1023バイトの循環バッファ。カーソルからの後方距離でバイトを参照する。
"""

from __future__ import annotations

from ecu_lzss.codec.params import MAX_MATCH, WINDOW_FILL, WINDOW_SIZE


class SlidingWindow:
    """循環履歴バッファ

    デコード開始前に全体が 0x11 で埋められる。
    エンコーダも同じ前提を置いているため、この値は変更できない。
    """

    def __init__(self) -> None:
        self._buffer = bytearray([WINDOW_FILL]) * WINDOW_SIZE
        self._cursor = 0
        self._staging = bytearray(MAX_MATCH)

    @property
    def cursor(self) -> int:
        """次に書き込む位置"""
        return self._cursor

    def snapshot(self) -> bytes:
        """バッファ内容のコピーを返す（位置はバッファ先頭基準）"""
        return bytes(self._buffer)

    def push(self, value: int) -> None:
        """1バイトを書き込みカーソルを進める"""
        self._buffer[self._cursor] = value
        self._cursor = (self._cursor + 1) % WINDOW_SIZE

    def copy(self, offset: int, length: int) -> bytes:
        """後方参照を再生する

        1バイトずつステージングバッファに読み出してからウィンドウへ書き戻す。
        offset < length の場合、同じマッチ内で書いたバイトが後続の読み出し元になる。

        Args:
            offset: カーソルからの後方距離
            length: コピー長（0の場合は何もしない）

        Returns:
            再生したバイト列

        Raises:
            ValueError: length が 0-63 の範囲外の場合
        """
        if not 0 <= length <= MAX_MATCH:
            raise ValueError(f"コピー長が不正です: {length}")
        source = (self._cursor - offset) % WINDOW_SIZE
        for i in range(length):
            value = self._buffer[(source + i) % WINDOW_SIZE]
            self._staging[i] = value
            self.push(value)
        return bytes(self._staging[:length])
