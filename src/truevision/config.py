"""Configuration module for truevision."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

SUPPORTED_OUTPUT_FORMATS = ("png", "webp")


class ConfigError(Exception):
    """設定ファイル読み込みエラー"""

    pass


@dataclass(frozen=True)
class DecodeConfig:
    """デコード設定"""

    strict: bool = False


@dataclass(frozen=True)
class OutputConfig:
    """出力画像設定"""

    format: str = "png"
    quality: int = 95
    lossless_alpha: bool = True


@dataclass(frozen=True)
class TruevisionConfig:
    """ルート設定"""

    decode: DecodeConfig = field(default_factory=DecodeConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    exclude: list[str] = field(default_factory=list)


def load_config(path: Path) -> TruevisionConfig:
    """設定ファイルを読み込む

    Args:
        path: 設定ファイルパス

    Returns:
        読み込んだ設定（デフォルトとマージ済み）

    Raises:
        ConfigError: ファイル読み込みまたはパースエラー
    """
    if not path.exists():
        raise ConfigError(f"設定ファイルが見つかりません: {path}")

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML解析エラー: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError("設定ファイルはYAMLのマッピング形式である必要があります")

    default = get_default_config()
    exclude = data.get("exclude", default.exclude)
    if not isinstance(exclude, list):
        raise ConfigError("exclude はリスト形式である必要があります")

    return TruevisionConfig(
        decode=_merge_decode_config(data.get("decode", {}), default.decode),
        output=_merge_output_config(data.get("output", {}), default.output),
        exclude=[str(pattern) for pattern in exclude],
    )


def get_default_config() -> TruevisionConfig:
    """デフォルト設定を取得する"""
    return TruevisionConfig()


def _merge_decode_config(data: dict[str, Any], default: DecodeConfig) -> DecodeConfig:
    """デコード設定をマージする"""
    if not isinstance(data, dict):
        return default
    return DecodeConfig(strict=bool(data.get("strict", default.strict)))


def _merge_output_config(data: dict[str, Any], default: OutputConfig) -> OutputConfig:
    """出力設定をマージする"""
    if not isinstance(data, dict):
        return default
    output_format = str(data.get("format", default.format)).lower()
    if output_format not in SUPPORTED_OUTPUT_FORMATS:
        raise ConfigError(f"未対応の出力形式です: {output_format}")
    return OutputConfig(
        format=output_format,
        quality=data.get("quality", default.quality),
        lossless_alpha=data.get("lossless_alpha", default.lossless_alpha),
    )
