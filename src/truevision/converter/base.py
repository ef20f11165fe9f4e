"""Converter基底クラスモジュール

画像変換を行うConverterの基底クラスと共通データ型を定義する。
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ConversionStatus(Enum):
    """変換ステータス

    成功、スキップ、失敗の3状態を持つ。
    """

    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class ConversionResult:
    """変換結果を表すデータクラス

    Attributes:
        source_path: 変換元ファイルのパス
        dest_path: 変換先ファイルのパス（変換失敗・スキップ時はNone）
        status: 変換ステータス
        message: 追加メッセージ（エラー詳細等）
        bytes_before: 変換前のファイルサイズ（バイト）
        bytes_after: 変換後のファイルサイズ（バイト）
    """

    source_path: Path
    dest_path: Path | None
    status: ConversionStatus
    message: str = ""
    bytes_before: int = 0
    bytes_after: int = 0

    @property
    def is_success(self) -> bool:
        return self.status == ConversionStatus.SUCCESS


class BaseConverter(ABC):
    """Converterの基底クラス"""

    @abstractmethod
    def can_convert(self, file_path: Path) -> bool:
        """このConverterで変換可能なファイルかを判定する"""
        ...

    @abstractmethod
    def convert(self, source: Path, dest: Path) -> ConversionResult:
        """ファイルを変換する

        Args:
            source: 変換元ファイルのパス
            dest: 変換先ファイルのパス

        Returns:
            変換結果を表すConversionResultオブジェクト
        """
        ...

    @property
    @abstractmethod
    def supported_extensions(self) -> tuple[str, ...]:
        """対応する拡張子のタプル（ドット付き小文字形式）"""
        ...

    def get_output_extension(self, source_path: Path) -> str | None:
        """変換後のファイル拡張子を返す（変更しない場合はNone）"""
        return None

    def _validate_source(self, source: Path) -> None:
        """変換元ファイルの検証を行う

        Raises:
            FileNotFoundError: ファイルが存在しない場合
            ValueError: ファイルではなくディレクトリの場合
        """
        if not source.exists():
            raise FileNotFoundError(f"変換元ファイルが見つかりません: {source}")
        if source.is_dir():
            raise ValueError(f"変換元はファイルである必要があります: {source}")

    def _get_file_size(self, path: Path) -> int:
        if path.exists():
            return path.stat().st_size
        return 0
