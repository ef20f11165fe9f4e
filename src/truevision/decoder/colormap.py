"""カラーマップ読み取りモジュール"""

import logging
import os
from typing import BinaryIO

from truevision.decoder.sample import Color, SampleDepth, SampleReader
from truevision.errors import IndexOutOfRange, UnsupportedColorMapDepth

logger = logging.getLogger(__name__)


class ColorMap:
    """パレット

    インデックスによる参照時に範囲チェックを行う。
    """

    def __init__(self, entries: list[Color]) -> None:
        self._entries = entries

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> Color:
        if not 0 <= index < len(self._entries):
            raise IndexOutOfRange(index, len(self._entries))
        return self._entries[index]

    @property
    def entries(self) -> tuple[Color, ...]:
        return tuple(self._entries)


def read_color_map(
    stream: BinaryIO,
    length: int,
    depth: int,
    *,
    strict: bool = False,
) -> ColorMap:
    """カラーマップを読み取る

    Args:
        stream: 現在位置がカラーマップ先頭のストリーム
        length: エントリ数
        depth: エントリの深度（ビット）
        strict: 読み取り不足をエラーにするか

    Returns:
        読み取ったカラーマップ

    Raises:
        UnsupportedColorMapDepth: 深度が8/16/24/32以外の場合（読み取り前に送出）
        TruncatedSample: strictモードでデータが不足した場合
    """
    sample_depth = SampleDepth.from_bits(depth)
    if sample_depth is None:
        raise UnsupportedColorMapDepth(depth)

    reader = SampleReader(stream, sample_depth, strict=strict)
    entries = [reader.read_color() for _ in range(length)]
    logger.debug("カラーマップを読み取りました: %dエントリ, %dビット", length, depth)
    return ColorMap(entries)


def skip_color_map(stream: BinaryIO, length: int, depth: int) -> None:
    """直接色画像に付随するカラーマップを読み飛ばす"""
    size = length * ((depth + 7) // 8)
    if size:
        stream.seek(size, os.SEEK_CUR)
