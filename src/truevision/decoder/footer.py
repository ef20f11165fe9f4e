"""TGAフッターモジュール

ファイル末尾26バイトのフッターを読み取り、TGA 2.0形式かどうかを判定する。
拡張領域や開発者領域の内容は解釈しない。
"""

import os
import struct
from dataclasses import dataclass
from typing import BinaryIO

from truevision.errors import FooterReadError

FOOTER_SIZE = 26
"""フッターサイズ（バイト）"""

SIGNATURE = b"TRUEVISION-XFILE"
"""TGA 2.0のシグネチャ"""

_SIGNATURE_OFFSET = 8


@dataclass(frozen=True)
class TGAFooter:
    """TGAフッター情報

    Attributes:
        extension_offset: 拡張領域のオフセット
        developer_offset: 開発者ディレクトリのオフセット
        is_tga2: シグネチャが一致したか
    """

    extension_offset: int
    developer_offset: int
    is_tga2: bool


def parse_footer(data: bytes) -> TGAFooter:
    """26バイトのフッターを解析する"""
    extension_offset, developer_offset = struct.unpack("<II", data[:_SIGNATURE_OFFSET])
    signature = data[_SIGNATURE_OFFSET : _SIGNATURE_OFFSET + len(SIGNATURE)]
    return TGAFooter(
        extension_offset=extension_offset,
        developer_offset=developer_offset,
        is_tga2=signature == SIGNATURE,
    )


def inspect_footer(stream: BinaryIO, total_length: int) -> TGAFooter:
    """ストリーム末尾のフッターを読み取る

    読み取り後、ストリームの位置は呼び出し前の位置に戻される。

    Args:
        stream: シーク可能なバイナリストリーム
        total_length: ストリーム全体の長さ（バイト）

    Returns:
        解析されたフッター情報

    Raises:
        FooterReadError: シークまたは読み取りができない場合
    """
    if total_length < FOOTER_SIZE:
        raise FooterReadError(f"フッターを読み取れません: ファイルサイズ {total_length}バイト")

    saved = stream.tell()
    try:
        stream.seek(total_length - FOOTER_SIZE, os.SEEK_SET)
    except (OSError, ValueError) as e:
        raise FooterReadError(f"フッター位置へのシークに失敗しました: {e}") from e

    data = stream.read(FOOTER_SIZE)
    if len(data) != FOOTER_SIZE:
        raise FooterReadError(f"フッターの読み取りに失敗しました: {len(data)}/{FOOTER_SIZE}バイト")

    try:
        stream.seek(saved, os.SEEK_SET)
    except (OSError, ValueError) as e:
        raise FooterReadError(f"データ位置への復帰に失敗しました: {e}") from e

    return parse_footer(data)
