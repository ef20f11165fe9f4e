"""カラーマップ読み取りのテスト"""

import io

import pytest

from truevision.decoder.colormap import ColorMap, read_color_map, skip_color_map
from truevision.errors import IndexOutOfRange, TruncatedSample, UnsupportedColorMapDepth


class TestReadColorMap:
    """read_color_map()のテスト"""

    def test_read_24bit_entries(self) -> None:
        stream = io.BytesIO(b"\x00\x00\xff" + b"\x00\xff\x00" + b"\xff\x00\x00")
        color_map = read_color_map(stream, 3, 24)

        assert len(color_map) == 3
        assert color_map.entries == (
            (255, 0, 0, 255),
            (0, 255, 0, 255),
            (0, 0, 255, 255),
        )

    def test_read_16bit_entries(self) -> None:
        color_map = read_color_map(io.BytesIO(b"\x00\xfc\x1f\x00"), 2, 16)
        assert color_map.entries == ((248, 0, 0, 255), (0, 0, 248, 0))

    def test_read_8bit_entries(self) -> None:
        color_map = read_color_map(io.BytesIO(b"\x10\x20"), 2, 8)
        assert color_map.entries == ((16, 16, 16, 255), (32, 32, 32, 255))

    def test_empty(self) -> None:
        color_map = read_color_map(io.BytesIO(b""), 0, 24)
        assert len(color_map) == 0

    @pytest.mark.parametrize(
        "depth",
        [
            pytest.param(0, id="深度0"),
            pytest.param(15, id="深度15"),
            pytest.param(64, id="深度64"),
        ],
    )
    def test_unsupported_depth_before_read(self, depth: int) -> None:
        """未対応の深度は読み取り前にUnsupportedColorMapDepthを送出する"""
        stream = io.BytesIO(b"\x00" * 16)

        with pytest.raises(UnsupportedColorMapDepth) as exc_info:
            read_color_map(stream, 4, depth)

        assert exc_info.value.depth == depth
        assert stream.tell() == 0

    def test_lenient_truncated(self) -> None:
        """データ不足のエントリは透明色になる"""
        color_map = read_color_map(io.BytesIO(b"\x00\x00\xff"), 2, 24)
        assert color_map.entries == ((255, 0, 0, 255), (0, 0, 0, 0))

    def test_strict_truncated(self) -> None:
        with pytest.raises(TruncatedSample):
            read_color_map(io.BytesIO(b"\x00\x00\xff"), 2, 24, strict=True)


class TestColorMapIndex:
    """ColorMapのインデックス参照のテスト"""

    def test_in_range(self) -> None:
        color_map = ColorMap([(1, 2, 3, 255), (4, 5, 6, 255)])
        assert color_map[1] == (4, 5, 6, 255)

    @pytest.mark.parametrize(
        "index",
        [
            pytest.param(2, id="異常系: 長さと同じ"),
            pytest.param(0xFFFF, id="異常系: 大きなインデックス"),
            pytest.param(-1, id="異常系: 負のインデックス"),
        ],
    )
    def test_out_of_range(self, index: int) -> None:
        color_map = ColorMap([(1, 2, 3, 255), (4, 5, 6, 255)])

        with pytest.raises(IndexOutOfRange) as exc_info:
            color_map[index]

        assert exc_info.value.index == index
        assert exc_info.value.length == 2

    def test_empty_map_rejects_zero(self) -> None:
        with pytest.raises(IndexOutOfRange):
            ColorMap([])[0]


class TestSkipColorMap:
    """skip_color_map()のテスト"""

    @pytest.mark.parametrize(
        "length, depth, expected",
        [
            pytest.param(4, 24, 12, id="24ビット"),
            pytest.param(3, 16, 6, id="16ビット"),
            pytest.param(2, 15, 4, id="15ビットは2バイト"),
            pytest.param(0, 0, 0, id="カラーマップなし"),
        ],
    )
    def test_skip(self, length: int, depth: int, expected: int) -> None:
        stream = io.BytesIO(b"\x00" * 32)
        skip_color_map(stream, length, depth)
        assert stream.tell() == expected
