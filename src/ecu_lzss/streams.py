"""入出力ストリームモジュール

ファイルまたは標準入出力とのバイト列の受け渡しを行う。
パスに None を指定した場合は標準入出力のバイナリストリームを使う。
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import BinaryIO

from ecu_lzss.errors import AllocationFailure, IOFailure


def read_input(path: Path | None, stream: BinaryIO | None = None) -> bytes:
    """入力全体を読み込む

    Args:
        path: 入力ファイルパス（Noneの場合はストリームから読む）
        stream: 読み込み元ストリーム（Noneの場合は標準入力）

    Returns:
        入力データ

    Raises:
        IOFailure: 読み込みに失敗した場合
        AllocationFailure: 入力を保持するメモリを確保できなかった場合
    """
    try:
        if path is not None:
            return path.read_bytes()
        source = stream if stream is not None else sys.stdin.buffer
        return source.read()
    except MemoryError as e:
        raise AllocationFailure("入力バッファの確保に失敗しました") from e
    except OSError as e:
        name = str(path) if path is not None else "<stdin>"
        raise IOFailure(f"入力の読み込みに失敗しました: {name}: {e}") from e


def write_output(path: Path | None, data: bytes, stream: BinaryIO | None = None) -> None:
    """出力を書き出す

    Args:
        path: 出力ファイルパス（Noneの場合はストリームへ書く）
        data: 書き出すデータ
        stream: 書き込み先ストリーム（Noneの場合は標準出力）

    Raises:
        IOFailure: 書き込みに失敗した場合
    """
    try:
        if path is not None:
            path.write_bytes(data)
            return
        sink = stream if stream is not None else sys.stdout.buffer
        sink.write(data)
        sink.flush()
    except OSError as e:
        name = str(path) if path is not None else "<stdout>"
        raise IOFailure(f"出力の書き込みに失敗しました: {name}: {e}") from e
