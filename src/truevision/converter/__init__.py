"""Converter module for truevision.

TGA画像をPNG/WebP形式に変換する機能を提供する。
"""

from truevision.converter.base import BaseConverter, ConversionResult, ConversionStatus
from truevision.converter.image import (
    OutputFormat,
    QualityPreset,
    TGAImageConverter,
    TGAInfo,
    get_info,
)
from truevision.converter.manager import ConversionManager, ConversionSummary

__all__ = [
    "BaseConverter",
    "ConversionManager",
    "ConversionResult",
    "ConversionStatus",
    "ConversionSummary",
    "OutputFormat",
    "QualityPreset",
    "TGAImageConverter",
    "TGAInfo",
    "get_info",
]
