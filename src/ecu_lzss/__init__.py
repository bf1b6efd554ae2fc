"""ecu-lzss - ECU bootloader compatible LZSS compressor CLI tool."""

from ecu_lzss.codec import (
    LZSSDecoder,
    LZSSEncoder,
    PaddingMode,
    analyze_stream,
    compress,
    decompress,
)
from ecu_lzss.errors import (
    AllocationFailure,
    InvocationError,
    IOFailure,
    LZSSError,
)
from ecu_lzss.logger import (
    CodecLogger,
    LogConfig,
    VerboseLevel,
)

__version__ = "0.1.0"

__all__ = [
    "AllocationFailure",
    "CodecLogger",
    "IOFailure",
    "InvocationError",
    "LZSSDecoder",
    "LZSSEncoder",
    "LZSSError",
    "LogConfig",
    "PaddingMode",
    "VerboseLevel",
    "analyze_stream",
    "compress",
    "decompress",
]
