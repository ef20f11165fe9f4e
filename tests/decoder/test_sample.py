"""ピクセルサンプル読み取りのテスト"""

import io

import pytest

from truevision.decoder.sample import (
    TRANSPARENT,
    Color,
    SampleDepth,
    SampleReader,
    unpack_color,
    unpack_index,
)
from truevision.errors import TruncatedSample


class TestSampleDepth:
    """SampleDepthのテスト"""

    @pytest.mark.parametrize(
        "bits, expected",
        [
            pytest.param(8, SampleDepth.GRAY8, id="8ビット"),
            pytest.param(16, SampleDepth.RGB16, id="16ビット"),
            pytest.param(24, SampleDepth.RGB24, id="24ビット"),
            pytest.param(32, SampleDepth.RGBA32, id="32ビット"),
            pytest.param(15, None, id="未対応: 15ビット"),
            pytest.param(0, None, id="未対応: 0ビット"),
        ],
    )
    def test_from_bits(self, bits: int, expected: SampleDepth | None) -> None:
        assert SampleDepth.from_bits(bits) is expected

    @pytest.mark.parametrize(
        "depth, expected",
        [
            pytest.param(SampleDepth.GRAY8, 1, id="8ビット"),
            pytest.param(SampleDepth.RGB16, 2, id="16ビット"),
            pytest.param(SampleDepth.RGB24, 3, id="24ビット"),
            pytest.param(SampleDepth.RGBA32, 4, id="32ビット"),
        ],
    )
    def test_byte_count(self, depth: SampleDepth, expected: int) -> None:
        assert depth.byte_count == expected


class TestUnpackColor:
    """unpack_color()のテスト"""

    @pytest.mark.parametrize(
        "depth, raw, expected",
        [
            pytest.param(SampleDepth.GRAY8, b"\x80", (128, 128, 128, 255), id="8ビット: グレー"),
            pytest.param(SampleDepth.GRAY8, b"\x00", (0, 0, 0, 255), id="8ビット: 黒も不透明"),
            pytest.param(
                SampleDepth.RGB16, b"\x01\xfc", (248, 0, 8, 255), id="16ビット: アルファあり"
            ),
            pytest.param(
                SampleDepth.RGB16, b"\xff\x7f", (248, 248, 248, 0), id="16ビット: アルファなし"
            ),
            pytest.param(
                SampleDepth.RGB16, b"\xe0\x03", (0, 248, 0, 0), id="16ビット: 緑のみ"
            ),
            pytest.param(
                SampleDepth.RGB24, b"\x0a\x14\x1e", (30, 20, 10, 255), id="24ビット: BGR順"
            ),
            pytest.param(
                SampleDepth.RGBA32, b"\x01\x02\x03\x04", (3, 2, 1, 4), id="32ビット: BGRA順"
            ),
        ],
    )
    def test_unpack(self, depth: SampleDepth, raw: bytes, expected: Color) -> None:
        assert unpack_color(depth, raw) == expected


class TestUnpackIndex:
    """unpack_index()のテスト"""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            pytest.param(b"\x05", 5, id="1バイト"),
            pytest.param(b"\x01\x02", 0x0201, id="2バイト"),
            pytest.param(b"\x01\x02\x03", 0x030201, id="3バイト"),
            pytest.param(b"\x01\x02\x03\x04", 0x04030201, id="4バイト"),
            pytest.param(b"\xff\xff\xff\xff", 0xFFFFFFFF, id="符号なし"),
        ],
    )
    def test_little_endian(self, raw: bytes, expected: int) -> None:
        assert unpack_index(raw) == expected


class TestSampleReader:
    """SampleReaderのテスト"""

    def test_consumes_fixed_byte_count(self) -> None:
        """1回の読み取りで深度分のバイトを消費する"""
        stream = io.BytesIO(b"\x0a\x14\x1e\x01\x02\x03")
        reader = SampleReader(stream, SampleDepth.RGB24)

        assert reader.read_color() == (30, 20, 10, 255)
        assert stream.tell() == 3
        assert reader.read_index() == 0x030201
        assert stream.tell() == 6

    def test_lenient_truncated_color(self) -> None:
        """バイト不足時は透明色を返す"""
        reader = SampleReader(io.BytesIO(b"\x01\x02"), SampleDepth.RGBA32)
        assert reader.read_color() == TRANSPARENT

    def test_lenient_truncated_index(self) -> None:
        """バイト不足時はインデックス0を返す"""
        reader = SampleReader(io.BytesIO(b""), SampleDepth.RGB16)
        assert reader.read_index() == 0

    @pytest.mark.parametrize(
        "depth, data",
        [
            pytest.param(SampleDepth.GRAY8, b"", id="8ビット"),
            pytest.param(SampleDepth.RGB16, b"\x01", id="16ビット"),
            pytest.param(SampleDepth.RGB24, b"\x01\x02", id="24ビット"),
            pytest.param(SampleDepth.RGBA32, b"\x01\x02\x03", id="32ビット"),
        ],
    )
    def test_strict_truncated(self, depth: SampleDepth, data: bytes) -> None:
        """strictモードではTruncatedSampleを送出する"""
        reader = SampleReader(io.BytesIO(data), depth, strict=True)

        with pytest.raises(TruncatedSample) as exc_info:
            reader.read_color()

        assert exc_info.value.expected == depth.byte_count
        assert exc_info.value.actual == len(data)
