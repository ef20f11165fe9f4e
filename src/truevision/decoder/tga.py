"""TGAファイルモジュール

ヘッダーとフッターの検証、および画像タイプに応じたデコード処理の選択を行う。
"""

from __future__ import annotations

import io
import logging
import os
from pathlib import Path
from typing import BinaryIO

from PIL import Image

from truevision.decoder.colormap import ColorMap, read_color_map, skip_color_map
from truevision.decoder.footer import TGAFooter, inspect_footer
from truevision.decoder.header import (
    HEADER_SIZE,
    Compression,
    ImageType,
    TGAHeader,
    parse_header,
)
from truevision.decoder.rle import RunLengthDecoder
from truevision.decoder.sample import SampleDepth, SampleReader
from truevision.decoder.scanline import ScanlineWriter, empty_image
from truevision.errors import SourceError

logger = logging.getLogger(__name__)


class TGAFile:
    """TGA画像ファイル

    構築時にヘッダーとフッターを読み取り、妥当性を記録する。
    I/Oエラーはその時点で構築処理を打ち切り、
    画像タイプやピクセル深度の不正は記録したうえで処理を続ける。
    いずれの場合も例外は送出せず、is_validとerror_messageで状態を公開する。

    使用例:
        >>> with TGAFile.open(Path("image.tga")) as tga:
        ...     if tga.is_valid:
        ...         image = tga.read_image()

    Attributes:
        strict: 読み取り不足やRLEデータの途中終了をエラーにするか
    """

    def __init__(self, stream: BinaryIO, *, strict: bool = False) -> None:
        """TGAFileを初期化する

        Args:
            stream: 読み取り可能かつシーク可能なバイナリストリーム
            strict: 切り詰められたデータをエラーとして扱うか
        """
        self._stream = stream
        self._owns_stream = False
        self.strict = strict
        self._errors: list[str] = []
        self._header: TGAHeader | None = None
        self._footer: TGAFooter | None = None

        try:
            self._load()
        except SourceError as e:
            self._errors.append(str(e))

        if self._errors:
            logger.debug("TGAの検証に失敗しました: %s", self.error_message)

    @classmethod
    def open(cls, path: Path, *, strict: bool = False) -> TGAFile:
        """ファイルを開いてTGAFileを作成する

        作成したTGAFileはファイルを所有し、close()で閉じる。

        Raises:
            FileNotFoundError: ファイルが存在しない場合
        """
        if not path.exists():
            raise FileNotFoundError(f"ファイルが見つかりません: {path}")
        tga = cls(open(path, "rb"), strict=strict)  # noqa: SIM115
        tga._owns_stream = True
        return tga

    @classmethod
    def from_bytes(cls, data: bytes, *, strict: bool = False) -> TGAFile:
        """メモリ上のバイト列からTGAFileを作成する"""
        return cls(io.BytesIO(data), strict=strict)

    def __enter__(self) -> TGAFile:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """自身で開いたストリームを閉じる"""
        if self._owns_stream:
            self._stream.close()
            self._owns_stream = False

    def _load(self) -> None:
        stream = self._stream
        try:
            readable = stream.readable()
            seekable = stream.seekable()
        except ValueError as e:
            raise SourceError(f"画像データを読み取れません: {e}") from e
        if not readable:
            raise SourceError("画像データを読み取れません")
        if not seekable:
            raise SourceError("シーケンシャルなデバイスからの読み取りには対応していません")

        try:
            stream.seek(0, os.SEEK_SET)
        except (OSError, ValueError) as e:
            raise SourceError(f"画像読み取りのためのシークに失敗しました: {e}") from e

        self._header = parse_header(stream.read(HEADER_SIZE))
        self._errors.extend(str(e) for e in self._header.validate())

        # ヘッダーが不正でもフッターは読み取る
        self._footer = inspect_footer(stream, self._stream_length())

    def _stream_length(self) -> int:
        stream = self._stream
        try:
            position = stream.tell()
            length = stream.seek(0, os.SEEK_END)
            stream.seek(position, os.SEEK_SET)
        except (OSError, ValueError) as e:
            raise SourceError(f"ファイルサイズの取得に失敗しました: {e}") from e
        return length

    @property
    def is_valid(self) -> bool:
        return not self._errors

    @property
    def error_message(self) -> str:
        """エラーメッセージ（複数ある場合は「; 」で連結、妥当な場合は空文字列）"""
        return "; ".join(self._errors)

    @property
    def errors(self) -> tuple[str, ...]:
        return tuple(self._errors)

    @property
    def header(self) -> TGAHeader | None:
        return self._header

    @property
    def footer(self) -> TGAFooter | None:
        return self._footer

    @property
    def is_tga2(self) -> bool:
        """フッターにTGA 2.0のシグネチャがあるか"""
        return self._footer is not None and self._footer.is_tga2

    @property
    def width(self) -> int:
        return self._header.width if self._header else 0

    @property
    def height(self) -> int:
        return self._header.height if self._header else 0

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def x_offset(self) -> int:
        return self._header.x_offset if self._header else 0

    @property
    def y_offset(self) -> int:
        return self._header.y_offset if self._header else 0

    @property
    def horizontal_flip(self) -> bool:
        return self._header.horizontal_flip if self._header else False

    @property
    def vertical_flip(self) -> bool:
        return self._header.vertical_flip if self._header else False

    @property
    def compression(self) -> Compression:
        return self._header.compression if self._header else Compression.NONE

    def read_image(self) -> Image.Image:
        """画像データをデコードする

        不正なファイル、または画像タイプ0の場合は空のラスターを返す。

        Returns:
            RGBAモードのPIL Imageオブジェクト

        Raises:
            UnsupportedColorMapDepth: カラーマップの深度が未対応の場合
            IndexOutOfRange: パレットインデックスが範囲外の場合
            DecodeTruncation: strictモードでデータが不足した場合
        """
        header = self._header
        if header is None or not self.is_valid:
            return empty_image()
        if not header.has_image_data:
            return empty_image()

        stream = self._stream
        stream.seek(header.data_offset, os.SEEK_SET)

        color_map: ColorMap | None = None
        if header.is_indexed:
            color_map = read_color_map(
                stream, header.color_map_length, header.color_map_depth, strict=self.strict
            )
        else:
            skip_color_map(stream, header.color_map_length, header.color_map_depth)

        reader = SampleReader(stream, SampleDepth(header.pixel_depth), strict=self.strict)
        writer = ScanlineWriter(
            header.width,
            header.height,
            horizontal_flip=header.horizontal_flip,
            vertical_flip=header.vertical_flip,
        )

        match header.image_type:
            case ImageType.COLOR_MAPPED:
                assert color_map is not None
                self._read_indexed(reader, writer, color_map)
            case ImageType.TRUE_COLOR | ImageType.GRAYSCALE:
                self._read_direct(reader, writer)
            case ImageType.RLE_COLOR_MAPPED:
                assert color_map is not None
                rle = RunLengthDecoder(stream, reader, writer, strict=self.strict)
                rle.decode_indexes(color_map)
            case ImageType.RLE_TRUE_COLOR | ImageType.RLE_GRAYSCALE:
                rle = RunLengthDecoder(stream, reader, writer, strict=self.strict)
                rle.decode_colors()

        return writer.to_image()

    def _read_direct(self, reader: SampleReader, writer: ScanlineWriter) -> None:
        for y in range(writer.height):
            for x in range(writer.width):
                writer.put(x, y, reader.read_color())

    def _read_indexed(
        self, reader: SampleReader, writer: ScanlineWriter, color_map: ColorMap
    ) -> None:
        for y in range(writer.height):
            for x in range(writer.width):
                writer.put(x, y, color_map[reader.read_index()])
