"""LZSS圧縮/解凍エンジン

ECUブートローダが要求するバイト配置を再現するLZSS実装。
"""

from ecu_lzss.codec.analysis import StreamStats, analyze_stream
from ecu_lzss.codec.decoder import LZSSDecoder, Token, TokenKind, TokenParser, decompress
from ecu_lzss.codec.encoder import EncodeResult, EncodeStatistics, LZSSEncoder, compress
from ecu_lzss.codec.match import Match, find_match
from ecu_lzss.codec.padding import PaddingMode
from ecu_lzss.codec.window import SlidingWindow

__all__ = [
    "EncodeResult",
    "EncodeStatistics",
    "LZSSDecoder",
    "LZSSEncoder",
    "Match",
    "PaddingMode",
    "SlidingWindow",
    "StreamStats",
    "Token",
    "TokenKind",
    "TokenParser",
    "analyze_stream",
    "compress",
    "decompress",
    "find_match",
]
