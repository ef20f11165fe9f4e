"""共通フィクスチャ"""

import struct
from collections.abc import Callable

import pytest

FOOTER_SIZE = 26
TGA2_FOOTER = struct.pack("<II", 0, 0) + b"TRUEVISION-XFILE" + b".\x00"


def build_tga(
    *,
    image_type: int = 2,
    pixel_depth: int = 24,
    width: int = 1,
    height: int = 1,
    descriptor: int = 0,
    x_offset: int = 0,
    y_offset: int = 0,
    id_field: bytes = b"",
    color_map_type: int = 0,
    color_map_length: int = 0,
    color_map_depth: int = 0,
    color_map: bytes = b"",
    data: bytes = b"",
    footer: bool = False,
    pad: bool = True,
) -> bytes:
    """テスト用のTGAデータを生成する

    padが真の場合、ファイル全体がフッターサイズ未満にならないよう
    画像IDフィールドを埋める（画像データの後ろには何も付け足さない）。
    """
    body_size = 18 + len(id_field) + len(color_map) + len(data)
    if footer:
        body_size += FOOTER_SIZE
    if pad and body_size < FOOTER_SIZE:
        id_field = id_field + b"\x00" * (FOOTER_SIZE - body_size)

    header = struct.pack(
        "<BBBHHBHHHHBB",
        len(id_field),
        color_map_type,
        image_type,
        0,
        color_map_length,
        color_map_depth,
        x_offset,
        y_offset,
        width,
        height,
        pixel_depth,
        descriptor,
    )
    result = header + id_field + color_map + data
    if footer:
        result += TGA2_FOOTER
    return result


@pytest.fixture
def make_tga() -> Callable[..., bytes]:
    """TGAデータ生成関数"""
    return build_tga
