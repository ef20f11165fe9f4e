"""RLE解凍モジュール

TGAのランレングス符号化パケットを解凍し、ScanlineWriterへ書き込む。
パケットの区切りは行をまたいでもよい。
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import BinaryIO

from truevision.decoder.colormap import ColorMap
from truevision.decoder.sample import Color, SampleReader
from truevision.decoder.scanline import ScanlineWriter
from truevision.errors import TruncatedStream

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RLEPacket:
    """RLEパケットヘッダー

    Attributes:
        repeat: 繰り返しパケットか（ビット7）
        count: ランの長さ（1〜128）
    """

    repeat: bool
    count: int

    @classmethod
    def from_byte(cls, value: int) -> "RLEPacket":
        return cls(repeat=bool(value & 0x80), count=(value & 0x7F) + 1)


class RunLengthDecoder:
    """RLEデコーダー

    パケットヘッダーが読み取れなくなった時点で解凍を終了する。
    残りのピクセルは初期値のまま残る。strictモードではTruncatedStreamを送出する。
    """

    def __init__(
        self,
        stream: BinaryIO,
        reader: SampleReader,
        writer: ScanlineWriter,
        *,
        strict: bool = False,
    ) -> None:
        self._stream = stream
        self._reader = reader
        self._writer = writer
        self._strict = strict

    def read_packet(self) -> RLEPacket | None:
        """パケットヘッダーを1バイト読み取る（ストリーム終端ならNone）"""
        data = self._stream.read(1)
        if not data:
            return None
        return RLEPacket.from_byte(data[0])

    def decode_colors(self) -> int:
        """直接色のRLEデータを解凍する

        Returns:
            書き込んだピクセル数
        """
        return self._decode(self._reader.read_color)

    def decode_indexes(self, color_map: ColorMap) -> int:
        """カラーマップ参照のRLEデータを解凍する

        Raises:
            IndexOutOfRange: インデックスがカラーマップの範囲外の場合
        """
        return self._decode(lambda: color_map[self._reader.read_index()])

    def _decode(self, read_sample: Callable[[], Color]) -> int:
        total = self._writer.pixel_count
        cursor = 0

        while cursor < total:
            packet = self.read_packet()
            if packet is None:
                if self._strict:
                    raise TruncatedStream(cursor, total)
                logger.debug("RLEデータが途中で終了しました: %d/%dピクセル", cursor, total)
                break

            run = min(packet.count, total - cursor)
            if packet.repeat:
                color = read_sample()
                for _ in range(run):
                    self._writer.put_linear(cursor, color)
                    cursor += 1
            else:
                for _ in range(run):
                    self._writer.put_linear(cursor, read_sample())
                    cursor += 1

        return cursor
