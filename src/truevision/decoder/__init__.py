"""TGA画像デコーダーパッケージ

Truevision TGA形式の画像をRGBAラスターにデコードする。
"""

from truevision.decoder.colormap import ColorMap, read_color_map
from truevision.decoder.footer import TGAFooter, inspect_footer
from truevision.decoder.header import Compression, ImageType, TGAHeader, parse_header
from truevision.decoder.rle import RLEPacket, RunLengthDecoder
from truevision.decoder.sample import Color, SampleDepth, SampleReader
from truevision.decoder.scanline import ScanlineWriter
from truevision.decoder.tga import TGAFile

__all__ = [
    "Color",
    "ColorMap",
    "Compression",
    "ImageType",
    "RLEPacket",
    "RunLengthDecoder",
    "SampleDepth",
    "SampleReader",
    "ScanlineWriter",
    "TGAFile",
    "TGAFooter",
    "TGAHeader",
    "inspect_footer",
    "parse_header",
    "read_color_map",
]
