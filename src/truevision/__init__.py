"""truevision - Truevision TGA image decoder."""

from truevision.decoder import Compression, ImageType, TGAFile, TGAHeader
from truevision.errors import (
    DecodeTruncation,
    FooterReadError,
    FormatError,
    IndexOutOfRange,
    PaletteError,
    SourceError,
    TGAError,
    TruncatedHeader,
    TruncatedSample,
    TruncatedStream,
    UnsupportedColorMapDepth,
)

__version__ = "0.1.0"

__all__ = [
    "Compression",
    "DecodeTruncation",
    "FooterReadError",
    "FormatError",
    "ImageType",
    "IndexOutOfRange",
    "PaletteError",
    "SourceError",
    "TGAError",
    "TGAFile",
    "TGAHeader",
    "TruncatedHeader",
    "TruncatedSample",
    "TruncatedStream",
    "UnsupportedColorMapDepth",
]
