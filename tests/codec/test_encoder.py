"""LZSSEncoderのテスト

リファレンスエンコーダと同一のバイト列を出力することを具体例で確認し、
往復変換とパディングの性質を検証する。
"""

import random

import pytest

from ecu_lzss.codec.decoder import TokenKind, TokenParser, decompress
from ecu_lzss.codec.encoder import EncodeResult, LZSSEncoder, compress
from ecu_lzss.codec.padding import PaddingMode
from ecu_lzss.errors import AllocationFailure


def _sample_inputs() -> list:
    rng = random.Random(20031124)
    text = b"ECU calibration block 0x0400 " * 20
    noisy = bytes(rng.randrange(256) for _ in range(1200))
    low_entropy = bytes(rng.choice(b"\x00\x01\xff") for _ in range(1500))
    return [
        pytest.param(b"", id="空"),
        pytest.param(b"A", id="1バイト"),
        pytest.param(b"AB", id="2バイト"),
        pytest.param(b"ABABA", id="ABABA"),
        pytest.param(b"A" * 8, id="同一バイト8個"),
        pytest.param(b"\x00" * 1000, id="ゼロ1000バイト"),
        pytest.param(b"\x11" * 70, id="ウィンドウ初期値と同じバイト"),
        pytest.param(text, id="繰り返しテキスト"),
        pytest.param(noisy, id="乱数"),
        pytest.param(low_entropy, id="低エントロピー"),
        pytest.param(noisy[:500] + text + noisy[:500], id="遠距離の繰り返し"),
    ]


class TestConcreteStreams:
    """既知の出力との比較"""

    def test_ababa_default(self) -> None:
        """有効なマッチが無く、5個のリテラルと10バイトのゼロ埋めになる"""
        expected = bytes([0x00, 0x41, 0x42, 0x41, 0x42, 0x41]) + b"\x00" * 10
        assert compress(b"ABABA") == expected

    def test_ababa_no_pad(self) -> None:
        assert compress(b"ABABA", PaddingMode.NO_PAD) == b"\x00ABABA"

    def test_ababa_exact_pad(self) -> None:
        """開いたグループをno-opで埋め、残りを末尾ブロックで揃える"""
        expected = (
            b"\x07ABABA"
            + b"\x00" * 6
            + b"\xff"
            + b"\x00" * 16
            + b"\xff\x00\x00"
        )
        assert compress(b"ABABA", PaddingMode.EXACT_PAD) == expected

    def test_repeated_byte_no_pad(self) -> None:
        """4番目のアイテムが offset=3, length=3 のマッチになる"""
        expected = bytes([0x10, 0x41, 0x41, 0x41, 0x0C, 0x03, 0x41, 0x41])
        assert compress(b"A" * 8, PaddingMode.NO_PAD) == expected

    def test_repeated_byte_exact_pad(self) -> None:
        expected = (
            bytes([0x13, 0x41, 0x41, 0x41, 0x0C, 0x03, 0x41, 0x41])
            + b"\x00" * 4
            + b"\xff"
            + b"\x00" * 16
            + b"\xff\x00\x00"
        )
        assert compress(b"A" * 8, PaddingMode.EXACT_PAD) == expected

    def test_odd_gap_exact_pad(self) -> None:
        expected = b"\x0fABCD" + b"\x00" * 8 + b"\xff\x00\x00"
        assert compress(b"ABCD", PaddingMode.EXACT_PAD) == expected

    def test_full_group(self) -> None:
        assert compress(b"ABCDEFGH", PaddingMode.NO_PAD) == b"\x00ABCDEFGH"
        assert compress(b"ABCDEFGH") == b"\x00ABCDEFGH" + b"\x00" * 7
        assert compress(b"ABCDEFGH", PaddingMode.EXACT_PAD) == (
            b"\x00ABCDEFGH" + b"\xff" + b"\x00" * 6
        )

    def test_two_groups(self) -> None:
        assert compress(b"ABCDEFGHIJ", PaddingMode.NO_PAD) == b"\x00ABCDEFGH\x00IJ"

    @pytest.mark.parametrize("padding", list(PaddingMode))
    def test_empty_input(self, padding: PaddingMode) -> None:
        """空入力ではパディングも出力しない"""
        assert compress(b"", padding) == b""


class TestEncodeResult:
    """LZSSEncoder.encodeの戻り値のテスト"""

    def test_statistics(self) -> None:
        result = LZSSEncoder(PaddingMode.DEFAULT).encode(b"A" * 8)
        assert isinstance(result, EncodeResult)
        assert result.input_size == 8
        assert result.compressed_size == 16
        assert result.padding is PaddingMode.DEFAULT
        assert result.statistics.literals == 5
        assert result.statistics.matches == 1
        assert result.statistics.groups == 1
        assert result.statistics.noops == 0
        assert result.statistics.padding_bytes == 8

    def test_exact_pad_statistics(self) -> None:
        result = LZSSEncoder(PaddingMode.EXACT_PAD).encode(b"ABABA")
        assert result.statistics.noops == 3
        assert result.statistics.padding_bytes == 20

    def test_accepts_bytearray(self) -> None:
        encoder = LZSSEncoder(PaddingMode.NO_PAD)
        assert encoder.encode(bytearray(b"ABABA")).data == b"\x00ABABA"
        assert encoder.encode(memoryview(b"ABABA")).data == b"\x00ABABA"

    def test_allocation_failure(self) -> None:
        class Exploding:
            def __bytes__(self) -> bytes:
                raise MemoryError

        with pytest.raises(AllocationFailure):
            LZSSEncoder().encode(Exploding())  # type: ignore[arg-type]


class TestProperties:
    """往復変換とパディングの性質"""

    @pytest.mark.parametrize("data", _sample_inputs())
    @pytest.mark.parametrize(
        "padding", [PaddingMode.DEFAULT, PaddingMode.NO_PAD], ids=["default", "no-pad"]
    )
    def test_round_trip_with_length(self, data: bytes, padding: PaddingMode) -> None:
        encoded = compress(data, padding)
        assert decompress(encoded, len(data)) == data
        assert decompress(encoded)[: len(data)] == data

    @pytest.mark.parametrize("data", _sample_inputs())
    def test_exact_pad_round_trip_without_length(self, data: bytes) -> None:
        """exact-pad のストリームはサイズ指定なしでも元のサイズちょうどに戻る"""
        encoded = compress(data, PaddingMode.EXACT_PAD)
        assert decompress(encoded) == data
        assert decompress(encoded, len(data)) == data

    @pytest.mark.parametrize("data", _sample_inputs())
    def test_no_pad_round_trip_exact(self, data: bytes) -> None:
        """no-pad は末尾グループの未使用ビットが入力終端で無視される"""
        assert decompress(compress(data, PaddingMode.NO_PAD)) == data

    @pytest.mark.parametrize("data", _sample_inputs())
    @pytest.mark.parametrize("padding", [PaddingMode.DEFAULT, PaddingMode.EXACT_PAD])
    def test_alignment(self, data: bytes, padding: PaddingMode) -> None:
        assert len(compress(data, padding)) % 16 == 0

    @pytest.mark.parametrize("data", _sample_inputs())
    def test_default_is_no_pad_plus_zeros(self, data: bytes) -> None:
        unpadded = compress(data, PaddingMode.NO_PAD)
        padded = compress(data, PaddingMode.DEFAULT)
        assert padded[: len(unpadded)] == unpadded
        assert set(padded[len(unpadded) :]) <= {0}
        assert len(padded) - len(unpadded) < 16

    @pytest.mark.parametrize("data", _sample_inputs())
    def test_match_token_bounds(self, data: bytes) -> None:
        """出力されるマッチは 3 <= offset <= 1023, 3 <= length <= 63"""
        for token in TokenParser(compress(data, PaddingMode.NO_PAD)):
            assert token.kind is not TokenKind.NOOP
            if token.kind is TokenKind.MATCH:
                assert 3 <= token.offset <= 1023
                assert 3 <= token.length <= 63
                assert token.length <= token.offset

    @pytest.mark.parametrize("data", _sample_inputs())
    def test_deterministic(self, data: bytes) -> None:
        for padding in PaddingMode:
            assert compress(data, padding) == compress(data, padding)

    def test_long_run_uses_max_length(self) -> None:
        tokens = list(TokenParser(compress(b"\x00" * 1000, PaddingMode.NO_PAD)))
        lengths = {t.length for t in tokens if t.kind is TokenKind.MATCH}
        assert max(lengths) == 63
