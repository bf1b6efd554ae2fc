"""LZSSフォーマットの共通パラメータ

エンコーダとデコーダが共有する定数を定義する。
トークンは10ビットのオフセットと6ビットの長さを2バイトに詰めたもの。
"""

WINDOW_SIZE: int = 1023
"""スライディングウィンドウのサイズ（バイト）"""

OFFSET_BITS: int = 10
"""トークン内のオフセットのビット数"""

LENGTH_BITS: int = 6
"""トークン内の長さのビット数"""

MIN_MATCH: int = 3
"""マッチとして符号化する最小長、および最小オフセット"""

MAX_MATCH: int = 63
"""最大マッチ長"""

TOKEN_BYTES: int = 2
"""マッチトークンのバイト数"""

FLAGS_PER_GROUP: int = 8
"""1フラグバイトが受け持つアイテム数"""

WINDOW_FILL: int = 0x11
"""デコード開始時のウィンドウ初期値"""

ALIGNMENT: int = 16
"""パディングの境界（バイト）"""

OFFSET_HIGH_MASK: int = (1 << (OFFSET_BITS - 8)) - 1
"""1バイト目に格納されるオフセット上位ビットのマスク"""
