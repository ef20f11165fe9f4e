"""TGAフッター検出のテスト"""

import io
import struct

import pytest

from truevision.decoder.footer import FOOTER_SIZE, inspect_footer, parse_footer
from truevision.errors import FooterReadError


def _footer(signature: bytes = b"TRUEVISION-XFILE") -> bytes:
    return struct.pack("<II", 100, 200) + signature + b".\x00"


class TestParseFooter:
    """parse_footer()のテスト"""

    @pytest.mark.parametrize(
        "signature, expected",
        [
            pytest.param(b"TRUEVISION-XFILE", True, id="正常系: TGA 2.0"),
            pytest.param(b"TRUEVISION-XFILF", False, id="異常系: 末尾1文字違い"),
            pytest.param(b"truevision-xfile", False, id="異常系: 小文字"),
            pytest.param(b"\x00" * 16, False, id="異常系: ゼロ埋め"),
        ],
    )
    def test_signature(self, signature: bytes, expected: bool) -> None:
        footer = parse_footer(_footer(signature))
        assert footer.is_tga2 is expected

    def test_offsets(self) -> None:
        footer = parse_footer(_footer())
        assert footer.extension_offset == 100
        assert footer.developer_offset == 200


class TestInspectFooter:
    """inspect_footer()のテスト"""

    def test_reads_trailing_bytes_and_restores_position(self) -> None:
        """末尾26バイトを読み取り、ストリーム位置を元に戻す"""
        data = b"\x01" * 40 + _footer()
        stream = io.BytesIO(data)
        stream.seek(18)

        footer = inspect_footer(stream, len(data))

        assert footer.is_tga2 is True
        assert stream.tell() == 18

    def test_without_signature(self) -> None:
        data = b"\x00" * 64
        footer = inspect_footer(io.BytesIO(data), len(data))
        assert footer.is_tga2 is False

    @pytest.mark.parametrize(
        "length",
        [
            pytest.param(0, id="異常系: 空"),
            pytest.param(FOOTER_SIZE - 1, id="異常系: 25バイト"),
        ],
    )
    def test_too_short(self, length: int) -> None:
        """26バイト未満のソースはFooterReadError"""
        with pytest.raises(FooterReadError):
            inspect_footer(io.BytesIO(b"\x00" * length), length)

    def test_length_larger_than_stream(self) -> None:
        """申告された長さに対して実データが足りない場合もFooterReadError"""
        with pytest.raises(FooterReadError, match="フッターの読み取りに失敗しました"):
            inspect_footer(io.BytesIO(b"\x00" * 30), 100)
