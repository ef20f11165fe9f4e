"""進捗表示およびログ出力

CLIでの変換進捗とログ出力を扱う。
VerboseLevel (詳細ログレベル)に応じた出力制御を行う。
"""

from __future__ import annotations

import logging
import re
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import Protocol, TextIO


class VerboseLevel(IntEnum):
    """詳細ログレベル

    QUIET: エラーのみ出力
    NORMAL: 進捗バーとサマリ出力
    VERBOSE: 変換ファイル一覧も出力（-vオプション）
    DEBUG: ヘッダー情報などのデコード詳細も出力（-vvオプション）
    """

    QUIET = -1
    NORMAL = 0
    VERBOSE = 1
    DEBUG = 2


class ProgressDisplay(Protocol):
    """進捗表示のプロトコル"""

    def start(self, label: str, total: int) -> None:
        """処理開始を表示する

        Args:
            label: 処理の表示名
            total: 処理対象の総数
        """
        ...

    def update(self, current: int, message: str = "") -> None:
        """進捗を更新する"""
        ...

    def finish(self, success: bool, message: str = "") -> None:
        """処理終了を表示する"""
        ...


@dataclass
class LogConfig:
    """ログ設定

    Attributes:
        verbose_level: ログの詳細度レベル
        log_file: ログ出力先ファイルパス（Noneの場合はファイル出力なし）
        use_color: カラー出力を使用するか
        use_emoji: emoji表示を使用するか
    """

    verbose_level: VerboseLevel = VerboseLevel.NORMAL
    log_file: Path | None = None
    use_color: bool = True
    use_emoji: bool = True


class ConsoleLogger:
    """コンソールログ出力クラス

    VerboseLevelに応じてメッセージのフィルタリングを行い、
    ログファイルが指定されていればタイムスタンプ付きで記録する。

    使用例:
        >>> with ConsoleLogger(LogConfig(verbose_level=VerboseLevel.VERBOSE)) as logger:
        ...     logger.info("変換を開始します")
    """

    _ANSI_ESCAPE_PATTERN = re.compile(r"\x1b\[[0-9;]*m")

    def __init__(self, config: LogConfig) -> None:
        self._config = config
        self._log_file: TextIO | None = None
        if config.log_file:
            # __exit__でファイルを閉じる
            self._log_file = open(config.log_file, "w", encoding="utf-8")  # noqa: SIM115

    def __enter__(self) -> ConsoleLogger:
        return self

    def __exit__(self, *args: object) -> None:
        if self._log_file:
            self._log_file.close()
            self._log_file = None

    @property
    def config(self) -> LogConfig:
        return self._config

    def _print(self, message: str, file: TextIO | None = None) -> None:
        if file is None:
            file = sys.stdout
        print(message, file=file)

    def _log_to_file(self, level: str, message: str) -> None:
        if self._log_file:
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            clean_message = self._strip_ansi(message)
            self._log_file.write(f"[{timestamp}] {level}: {clean_message}\n")
            self._log_file.flush()

    def _strip_ansi(self, text: str) -> str:
        return self._ANSI_ESCAPE_PATTERN.sub("", text)

    def info(self, message: str) -> None:
        """情報メッセージを出力する（NORMAL以上）"""
        if self._config.verbose_level >= VerboseLevel.NORMAL:
            self._print(message)
        self._log_to_file("INFO", message)

    def verbose(self, message: str) -> None:
        """詳細メッセージを出力する（VERBOSE以上）"""
        if self._config.verbose_level >= VerboseLevel.VERBOSE:
            self._print(message)
        self._log_to_file("VERBOSE", message)

    def debug(self, message: str) -> None:
        """デバッグメッセージを出力する（DEBUG以上）"""
        if self._config.verbose_level >= VerboseLevel.DEBUG:
            self._print(message)
        self._log_to_file("DEBUG", message)

    def error(self, message: str) -> None:
        """エラーメッセージを出力する（常に出力）"""
        self._print(f"エラー: {message}", file=sys.stderr)
        self._log_to_file("ERROR", message)

    def warning(self, message: str) -> None:
        """警告メッセージを出力する（QUIET以上）"""
        if self._config.verbose_level > VerboseLevel.QUIET:
            self._print(f"警告: {message}")
        self._log_to_file("WARNING", message)

    @contextmanager
    def capture_library_logs(self, name: str = "truevision") -> Iterator[None]:
        """ライブラリの標準loggingをdebug()に中継する（DEBUG以上）

        デコーダーが`logging.getLogger(__name__)`で出力する診断メッセージを、
        コンソールとログファイルに流す。DEBUG未満では何もしない。
        """
        if self._config.verbose_level < VerboseLevel.DEBUG:
            yield
            return

        library_logger = logging.getLogger(name)
        handler = _ConsoleLogHandler(self)
        previous_level = library_logger.level
        library_logger.addHandler(handler)
        library_logger.setLevel(logging.DEBUG)
        try:
            yield
        finally:
            library_logger.removeHandler(handler)
            library_logger.setLevel(previous_level)

    def create_progress(self) -> ProgressDisplay:
        return ConsoleProgressDisplay(
            use_color=self._config.use_color,
            use_emoji=self._config.use_emoji,
        )

    def log_conversion(self, source: Path, dest: Path | None, status: str) -> None:
        """ファイル変換をログする（VERBOSE以上）"""
        dest_name = dest.name if dest else "-"
        self.verbose(f"変換: {source.name} -> {dest_name} [{status}]")

    def log_summary(self, total: int, success: int, failed: int, skipped: int) -> None:
        """変換サマリを出力する（NORMAL以上）"""
        emoji = "✅" if self._config.use_emoji else "[OK]"
        if failed:
            emoji = "❌" if self._config.use_emoji else "[NG]"
        self.info(f"{emoji} {success}/{total} files converted")
        if failed or skipped:
            self.info(f"   Failed: {failed}, Skipped: {skipped}")


class _ConsoleLogHandler(logging.Handler):
    """標準loggingのレコードをConsoleLogger.debug()に渡すハンドラ"""

    def __init__(self, console: ConsoleLogger) -> None:
        super().__init__(level=logging.DEBUG)
        self._console = console
        self.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._console.debug(self.format(record))
        except Exception:
            self.handleError(record)


class ConsoleProgressDisplay:
    """コンソール進捗表示

    進捗バーと絵文字で変換の進み具合を表示する。
    """

    def __init__(self, use_color: bool = True, use_emoji: bool = True) -> None:
        self._use_color = use_color
        self._use_emoji = use_emoji
        self._label = ""
        self._total = 0
        self._current = 0

    def start(self, label: str, total: int) -> None:
        self._label = label
        self._total = total
        self._current = 0
        prefix = "\U0001f504 " if self._use_emoji else ""
        print(f"{prefix}{label}...")

    def update(self, current: int, message: str = "") -> None:
        self._current = current
        if self._total > 0:
            percent = int((current / self._total) * 100)
            bar_width = 40
            filled = int(bar_width * current / self._total)
            bar = "█" * filled + "░" * (bar_width - filled)
            msg_part = f" {message}" if message else ""
            print(f"\r   [{bar}] {percent}%{msg_part}", end="", flush=True)

    def finish(self, success: bool, message: str = "") -> None:
        bar_width = 40
        full_bar = "█" * bar_width
        if success:
            mark = "✓" if self._use_emoji else "done"
            print(f"\r   [{full_bar}] 100% {mark}")
        else:
            mark = "✗" if self._use_emoji else "failed"
            msg_part = f": {message}" if message else ""
            print(f"\r   [{full_bar}] {mark}{msg_part}")
