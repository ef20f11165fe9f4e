"""ConversionManager モジュール

複数ファイルの並列変換と進捗管理を行うConversionManagerを提供する。
"""

import fnmatch
import os
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from threading import Lock

from truevision.converter.base import (
    BaseConverter,
    ConversionResult,
    ConversionStatus,
)


@dataclass
class ConversionSummary:
    """変換サマリー

    Attributes:
        total: 変換対象の総ファイル数
        success: 変換成功数
        failed: 変換失敗数
        skipped: スキップ数
        results: 個々の変換結果のリスト（変換元パス順）
    """

    total: int = 0
    success: int = 0
    failed: int = 0
    skipped: int = 0
    results: list[ConversionResult] = field(default_factory=list)


# 進捗コールバックの型エイリアス
ProgressCallback = Callable[[int, int], None]


class ConversionManager:
    """変換マネージャー

    複数ファイルの並列変換を管理する。
    各ファイルは独立したストリームでデコードされる。

    Attributes:
        converters: 使用可能なConverterのリスト
        exclude: 変換対象から除外するglobパターン（相対パスに対して評価）
        max_workers: 最大ワーカー数
        progress_callback: 進捗報告用コールバック
    """

    def __init__(
        self,
        converters: list[BaseConverter],
        exclude: list[str] | None = None,
        max_workers: int | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        self.converters = converters
        self.exclude = exclude or []
        self.max_workers = max_workers or max(1, os.cpu_count() or 1)
        self.progress_callback = progress_callback

    def convert_files(self, files: list[tuple[Path, Path]]) -> ConversionSummary:
        """複数ファイルを変換する

        Args:
            files: (変換元パス, 変換先パス)のタプルのリスト

        Returns:
            変換結果のサマリー
        """
        summary = ConversionSummary(total=len(files))
        completed_count = 0
        lock = Lock()

        def process_file(source: Path, dest: Path) -> ConversionResult:
            nonlocal completed_count
            result = self._convert_one(source, dest)

            with lock:
                completed_count += 1
                if self.progress_callback:
                    self.progress_callback(completed_count, summary.total)

            return result

        results: list[ConversionResult] = []
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [executor.submit(process_file, source, dest) for source, dest in files]
            for future in as_completed(futures):
                results.append(future.result())

        for result in sorted(results, key=lambda r: str(r.source_path)):
            summary.results.append(result)
            if result.status == ConversionStatus.SUCCESS:
                summary.success += 1
            elif result.status == ConversionStatus.SKIPPED:
                summary.skipped += 1
            else:
                summary.failed += 1

        return summary

    def _convert_one(self, source: Path, dest: Path) -> ConversionResult:
        converter = self.get_converter_for_file(source)
        if converter is None:
            return ConversionResult(
                source_path=source,
                dest_path=None,
                status=ConversionStatus.SKIPPED,
                message="対応するConverterが見つかりません",
            )

        try:
            return converter.convert(source, dest)
        except (OSError, ValueError) as e:
            return ConversionResult(
                source_path=source,
                dest_path=None,
                status=ConversionStatus.FAILED,
                message=str(e),
            )

    def collect_files(
        self,
        source_dir: Path,
        dest_dir: Path,
        recursive: bool = True,
    ) -> list[tuple[Path, Path]]:
        """ディレクトリから変換対象ファイルを収集する

        変換先はディレクトリ構造を保持し、拡張子をConverterの出力形式に置き換える。
        """
        files: list[tuple[Path, Path]] = []
        pattern = "**/*" if recursive else "*"

        for source_file in sorted(source_dir.glob(pattern)):
            if not source_file.is_file():
                continue

            relative_path = source_file.relative_to(source_dir)
            if self.is_excluded(relative_path):
                continue

            converter = self.get_converter_for_file(source_file)
            if converter is None:
                continue

            dest_file = dest_dir / relative_path
            extension = converter.get_output_extension(source_file)
            if extension:
                dest_file = dest_file.with_suffix(extension)

            files.append((source_file, dest_file))

        return files

    def convert_directory(
        self,
        source_dir: Path,
        dest_dir: Path,
        recursive: bool = True,
    ) -> ConversionSummary:
        """ディレクトリ内のファイルを変換する

        Args:
            source_dir: 変換元ディレクトリのパス
            dest_dir: 変換先ディレクトリのパス
            recursive: サブディレクトリも再帰的に処理するか

        Returns:
            変換結果のサマリー
        """
        return self.convert_files(self.collect_files(source_dir, dest_dir, recursive))

    def is_excluded(self, relative_path: Path) -> bool:
        """除外パターンに一致するか"""
        path_str = relative_path.as_posix()
        return any(
            fnmatch.fnmatch(path_str, pattern) or fnmatch.fnmatch(relative_path.name, pattern)
            for pattern in self.exclude
        )

    def get_converter_for_file(self, file_path: Path) -> BaseConverter | None:
        """ファイルに対応する最初のConverterを取得する"""
        for converter in self.converters:
            if converter.can_convert(file_path):
                return converter
        return None
