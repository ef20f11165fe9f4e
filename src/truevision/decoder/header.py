"""TGAヘッダーモジュール

18バイトの固定長ヘッダーを解析し、不変のデータクラスとして提供する。
"""

import struct
from dataclasses import dataclass
from enum import Enum, IntEnum

from PIL import Image

from truevision.errors import FormatError, TruncatedHeader

HEADER_SIZE = 18
"""ヘッダーサイズ（バイト）"""

_HEADER_FORMAT = "<BBBHHBHHHHBB"

SUPPORTED_PIXEL_DEPTHS: frozenset[int] = frozenset({8, 16, 24, 32})
"""対応するピクセル深度（ビット）"""


class ImageType(IntEnum):
    """TGAの画像タイプコード"""

    NO_IMAGE = 0
    COLOR_MAPPED = 1
    TRUE_COLOR = 2
    GRAYSCALE = 3
    RLE_COLOR_MAPPED = 9
    RLE_TRUE_COLOR = 10
    RLE_GRAYSCALE = 11


SUPPORTED_IMAGE_TYPES: frozenset[int] = frozenset(t.value for t in ImageType)
"""対応する画像タイプコード"""


class Compression(Enum):
    """画像データの圧縮方式"""

    NONE = "none"
    RUN_LENGTH = "rle"


@dataclass(frozen=True)
class TGAHeader:
    """TGAヘッダー情報

    Attributes:
        id_length: 画像IDフィールドの長さ
        color_map_type: カラーマップの有無
        image_type: 画像タイプコード
        color_map_origin: カラーマップの先頭インデックス
        color_map_length: カラーマップのエントリ数
        color_map_depth: カラーマップエントリの深度（ビット）
        x_offset: 画像のX原点
        y_offset: 画像のY原点
        width: 画像の幅（ピクセル）
        height: 画像の高さ（ピクセル）
        pixel_depth: ピクセル深度（ビット）
        descriptor: イメージディスクリプタ
    """

    id_length: int
    color_map_type: int
    image_type: int
    color_map_origin: int
    color_map_length: int
    color_map_depth: int
    x_offset: int
    y_offset: int
    width: int
    height: int
    pixel_depth: int
    descriptor: int

    @property
    def horizontal_flip(self) -> bool:
        """右から左へ格納されているか（ディスクリプタのビット4）"""
        return bool(self.descriptor & 0x10)

    @property
    def vertical_flip(self) -> bool:
        """原点が左上か（ディスクリプタのビット5）"""
        return bool(self.descriptor & 0x20)

    @property
    def compression(self) -> Compression:
        if 8 < self.image_type < 12:
            return Compression.RUN_LENGTH
        return Compression.NONE

    @property
    def is_supported_type(self) -> bool:
        return self.image_type in SUPPORTED_IMAGE_TYPES

    @property
    def is_indexed(self) -> bool:
        return self.image_type in (ImageType.COLOR_MAPPED, ImageType.RLE_COLOR_MAPPED)

    @property
    def has_image_data(self) -> bool:
        """画像データを持つか（画像タイプ0以外）"""
        return self.image_type != ImageType.NO_IMAGE

    @property
    def data_offset(self) -> int:
        """画像IDフィールドを読み飛ばした後の位置"""
        return HEADER_SIZE + self.id_length

    def validate(self) -> list[FormatError]:
        """フォーマット上の問題を列挙する

        Returns:
            検出したFormatErrorのリスト（問題がなければ空）
        """
        errors: list[FormatError] = []
        if not self.is_supported_type:
            errors.append(FormatError(f"未対応の画像タイプです: {self.image_type}"))
        if self.pixel_depth not in SUPPORTED_PIXEL_DEPTHS:
            errors.append(FormatError(f"ピクセル深度が不正です: {self.pixel_depth}"))
        if exceeds_pixel_limit(self.width, self.height):
            errors.append(FormatError(f"画像サイズが大きすぎます: {self.width}x{self.height}"))
        return errors


def exceeds_pixel_limit(width: int, height: int) -> bool:
    """PillowのDecompressionBombErrorと同じ上限（MAX_IMAGE_PIXELSの2倍）を超えるか

    Image.MAX_IMAGE_PIXELSがNoneの場合は上限なしとして扱う。
    """
    limit = Image.MAX_IMAGE_PIXELS
    if limit is None:
        return False
    return width * height > 2 * limit


def parse_header(data: bytes) -> TGAHeader:
    """TGAヘッダーを解析する

    Args:
        data: ファイル先頭のバイト列（18バイト以上）

    Returns:
        解析されたヘッダー情報

    Raises:
        TruncatedHeader: データが18バイトに満たない場合
    """
    if len(data) < HEADER_SIZE:
        raise TruncatedHeader(f"ヘッダーの読み取りに失敗しました: {len(data)}/{HEADER_SIZE}バイト")

    fields = struct.unpack(_HEADER_FORMAT, data[:HEADER_SIZE])
    return TGAHeader(*fields)
