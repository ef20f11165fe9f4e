"""ピクセルサンプル読み取りモジュール

ピクセル深度（8/16/24/32ビット）ごとにサンプルを読み取り、
直接色(RGBA)またはパレットインデックスに変換する。
"""

from enum import IntEnum
from typing import BinaryIO

from truevision.errors import TruncatedSample

Color = tuple[int, int, int, int]
"""RGBA各8ビットの色"""

TRANSPARENT: Color = (0, 0, 0, 0)
"""読み取り不足時に返す色"""


class SampleDepth(IntEnum):
    """サンプルのビット深度"""

    GRAY8 = 8
    RGB16 = 16
    RGB24 = 24
    RGBA32 = 32

    @property
    def byte_count(self) -> int:
        """1サンプルあたりのバイト数"""
        return self.value // 8

    @classmethod
    def from_bits(cls, bits: int) -> "SampleDepth | None":
        """ビット数から深度を取得する（未対応ならNone）"""
        try:
            return cls(bits)
        except ValueError:
            return None


def unpack_color(depth: SampleDepth, raw: bytes) -> Color:
    """ワイヤ上のバイト列を色に変換する

    Args:
        depth: サンプルの深度
        raw: depth.byte_count バイトのサンプル

    Returns:
        RGBA色
    """
    match depth:
        case SampleDepth.GRAY8:
            v = raw[0]
            return (v, v, v, 255)
        case SampleDepth.RGB16:
            d = raw[0] | (raw[1] << 8)
            alpha = 255 if d & 0x8000 else 0
            # 5ビットを左シフトで8ビットに拡張する（下位ビットは0のまま）
            return (
                ((d >> 10) & 0x1F) << 3,
                ((d >> 5) & 0x1F) << 3,
                (d & 0x1F) << 3,
                alpha,
            )
        case SampleDepth.RGB24:
            b, g, r = raw[0], raw[1], raw[2]
            return (r, g, b, 255)
        case SampleDepth.RGBA32:
            b, g, r, a = raw[0], raw[1], raw[2], raw[3]
            return (r, g, b, a)


def unpack_index(raw: bytes) -> int:
    """サンプルをリトルエンディアンの符号なし整数として解釈する"""
    return int.from_bytes(raw, "little")


class SampleReader:
    """深度固定のサンプルリーダー

    ストリームから1サンプル分のバイトを読み取る。
    バイトが不足した場合、通常は透明色またはインデックス0を返し、
    strictモードではTruncatedSampleを送出する。

    Attributes:
        depth: サンプルの深度
        strict: 読み取り不足をエラーにするか
    """

    def __init__(self, stream: BinaryIO, depth: SampleDepth, *, strict: bool = False) -> None:
        self._stream = stream
        self.depth = depth
        self.strict = strict
        self._size = depth.byte_count

    def _read_raw(self) -> bytes | None:
        raw = self._stream.read(self._size)
        if len(raw) == self._size:
            return raw
        if self.strict:
            raise TruncatedSample(self._size, len(raw))
        return None

    def read_color(self) -> Color:
        """1サンプルを読み取り色として返す"""
        raw = self._read_raw()
        if raw is None:
            return TRANSPARENT
        return unpack_color(self.depth, raw)

    def read_index(self) -> int:
        """1サンプルを読み取りパレットインデックスとして返す"""
        raw = self._read_raw()
        if raw is None:
            return 0
        return unpack_index(raw)
