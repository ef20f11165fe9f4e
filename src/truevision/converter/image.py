"""画像変換モジュール

TGA画像をデコードし、PNG/WebP形式で保存する。
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from PIL import Image

from truevision.converter.base import BaseConverter, ConversionResult, ConversionStatus
from truevision.decoder import Compression, TGAFile
from truevision.errors import TGAError


class QualityPreset(Enum):
    """WebP変換時の品質プリセット"""

    HIGH = 95
    MEDIUM = 85
    LOW = 70


class OutputFormat(Enum):
    """画像出力形式"""

    PNG = "png"
    WEBP = "webp"


@dataclass(frozen=True)
class TGAInfo:
    """TGA画像のメタ情報

    Attributes:
        width: 画像の幅（ピクセル）
        height: 画像の高さ（ピクセル）
        image_type: 画像タイプコード
        pixel_depth: ピクセル深度（ビット）
        compression: 圧縮方式
        is_tga2: TGA 2.0のフッターを持つか
        is_valid: 妥当なTGAファイルか
        error_message: 検証エラーのメッセージ
    """

    width: int
    height: int
    image_type: int
    pixel_depth: int
    compression: Compression
    is_tga2: bool
    is_valid: bool
    error_message: str


def get_info(file_path: Path) -> TGAInfo:
    """TGA画像のメタ情報を取得する

    Raises:
        FileNotFoundError: ファイルが存在しない場合
    """
    with TGAFile.open(file_path) as tga:
        header = tga.header
        return TGAInfo(
            width=tga.width,
            height=tga.height,
            image_type=header.image_type if header else 0,
            pixel_depth=header.pixel_depth if header else 0,
            compression=tga.compression,
            is_tga2=tga.is_tga2,
            is_valid=tga.is_valid,
            error_message=tga.error_message,
        )


class TGAImageConverter(BaseConverter):
    """TGA画像変換クラス

    TGAFileでデコードしたRGBAラスターをPNG/WebP形式で保存する。
    不正なTGAファイルは例外を送出せず、FAILEDの結果として返す。

    Attributes:
        output_format: 出力形式
        quality: WebP出力時の品質値（0-100）
        lossless_alpha: アルファチャンネルをロスレスで保存するか
        strict: 切り詰められたデータをエラーとして扱うか
    """

    def __init__(
        self,
        output_format: OutputFormat = OutputFormat.PNG,
        quality: QualityPreset | int = QualityPreset.HIGH,
        lossless_alpha: bool = True,
        strict: bool = False,
    ) -> None:
        self._output_format = output_format
        if isinstance(quality, QualityPreset):
            self._quality = quality.value
        else:
            self._quality = quality
        self._lossless_alpha = lossless_alpha
        self._strict = strict

    @property
    def output_format(self) -> OutputFormat:
        return self._output_format

    @property
    def quality(self) -> int:
        return self._quality

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".tga", ".icb", ".vda", ".vst")

    def can_convert(self, file_path: Path) -> bool:
        return file_path.suffix.lower() in self.supported_extensions

    def get_output_extension(self, source_path: Path) -> str | None:
        return f".{self._output_format.value}"

    def decode(self, source: Path) -> Image.Image:
        """TGA画像をデコードする

        Raises:
            FileNotFoundError: ファイルが存在しない場合
            ValueError: 不正なTGAファイル、または画像データを持たない場合
            TGAError: デコード中にエラーが発生した場合
        """
        with TGAFile.open(source, strict=self._strict) as tga:
            if not tga.is_valid:
                raise ValueError(f"不正なTGAファイルです: {tga.error_message}")
            image = tga.read_image()
        if image.width == 0 or image.height == 0:
            image.close()
            raise ValueError(f"画像データがありません: {source}")
        return image

    def convert(self, source: Path, dest: Path) -> ConversionResult:
        """TGA画像を指定された形式に変換する

        Args:
            source: 変換元ファイルのパス
            dest: 変換先ファイルのパス

        Returns:
            変換結果を表すConversionResultオブジェクト
        """
        self._validate_source(source)
        bytes_before = self._get_file_size(source)

        try:
            image = self.decode(source)
        except (ValueError, TGAError) as e:
            return ConversionResult(
                source_path=source,
                dest_path=None,
                status=ConversionStatus.FAILED,
                message=str(e),
                bytes_before=bytes_before,
            )

        try:
            if self._output_format == OutputFormat.PNG:
                return self._save_as_png(image, dest, source, bytes_before)
            return self._save_as_webp(image, dest, source, bytes_before)
        finally:
            image.close()

    def _save_as_webp(
        self,
        image: Image.Image,
        dest: Path,
        source: Path,
        bytes_before: int,
    ) -> ConversionResult:
        dest.parent.mkdir(parents=True, exist_ok=True)

        if self._lossless_alpha:
            image.save(dest, "WEBP", quality=self._quality, lossless=True)
        else:
            image.save(dest, "WEBP", quality=self._quality)

        return ConversionResult(
            source_path=source,
            dest_path=dest,
            status=ConversionStatus.SUCCESS,
            bytes_before=bytes_before,
            bytes_after=self._get_file_size(dest),
        )

    def _save_as_png(
        self,
        image: Image.Image,
        dest: Path,
        source: Path,
        bytes_before: int,
    ) -> ConversionResult:
        dest.parent.mkdir(parents=True, exist_ok=True)
        # PNGはロスレスのため品質設定は使用しない
        image.save(dest, "PNG")

        return ConversionResult(
            source_path=source,
            dest_path=dest,
            status=ConversionStatus.SUCCESS,
            bytes_before=bytes_before,
            bytes_after=self._get_file_size(dest),
        )
