"""CLI entry point for truevision."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from truevision import __version__
from truevision.config import ConfigError, TruevisionConfig, get_default_config, load_config
from truevision.converter import (
    ConversionManager,
    ConversionStatus,
    OutputFormat,
    TGAImageConverter,
    get_info,
)
from truevision.logger import ConsoleLogger, LogConfig, VerboseLevel
from truevision.types import ExitCode, Result

app = typer.Typer(help="TGA画像をデコードしてPNG/WebPに変換するCLIツール")
console = Console()


def _load_config(config_path: Path | None) -> TruevisionConfig:
    if config_path is None:
        return get_default_config()
    try:
        return load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(ExitCode.INVALID_INPUT) from e


@app.command()
def info(
    input_path: Annotated[Path, typer.Argument(help="TGAファイルパス")],
) -> None:
    """TGAヘッダー情報を表示する"""
    if not input_path.is_file():
        console.print(f"[red]Error: ファイルが見つかりません: {input_path}[/red]")
        raise typer.Exit(ExitCode.ERROR)

    tga_info = get_info(input_path)

    table = Table(title="TGA Info")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Size", f"{tga_info.width} x {tga_info.height}")
    table.add_row("Image Type", str(tga_info.image_type))
    table.add_row("Pixel Depth", f"{tga_info.pixel_depth} bit")
    table.add_row("Compression", tga_info.compression.value)
    table.add_row("TGA 2.0", "yes" if tga_info.is_tga2 else "no")
    table.add_section()
    if tga_info.is_valid:
        table.add_row("Valid", "[green]yes[/green]")
    else:
        table.add_row("Valid", "[red]no[/red]")
        table.add_row("Error", tga_info.error_message)

    console.print(table)
    raise typer.Exit(ExitCode.SUCCESS if tga_info.is_valid else ExitCode.ERROR)


def _convert_single(
    converter: TGAImageConverter, source: Path, dest: Path, logger: ConsoleLogger
) -> Result:
    result = converter.convert(source, dest)
    logger.log_conversion(source, result.dest_path, result.status.value)
    logger.debug(f"{source.name}: {result.bytes_before} -> {result.bytes_after} bytes")
    if result.is_success:
        return Result(success=True, message=f"変換完了: {dest}")
    return Result(success=False, message=f"変換失敗: {result.message}", exit_code=ExitCode.ERROR)


def _convert_directory(
    converter: TGAImageConverter,
    source: Path,
    dest: Path,
    config: TruevisionConfig,
    logger: ConsoleLogger,
) -> Result:
    show_progress = logger.config.verbose_level >= VerboseLevel.NORMAL
    progress = logger.create_progress() if show_progress else None
    manager = ConversionManager(
        [converter],
        exclude=config.exclude,
        progress_callback=(lambda current, _total: progress.update(current)) if progress else None,
    )
    files = manager.collect_files(source, dest)
    if progress:
        progress.start("Converting TGA images", len(files))
    summary = manager.convert_files(files)
    if progress:
        progress.finish(summary.failed == 0)

    for result in summary.results:
        logger.log_conversion(result.source_path, result.dest_path, result.status.value)
        if result.status == ConversionStatus.FAILED:
            logger.warning(f"{result.source_path}: {result.message}")
    logger.log_summary(summary.total, summary.success, summary.failed, summary.skipped)

    if summary.failed:
        return Result(
            success=False,
            message=f"{summary.failed}件の変換に失敗しました",
            exit_code=ExitCode.ERROR,
        )
    return Result(success=True, message=f"{summary.success}件を変換しました")


@app.command()
def convert(
    input_path: Annotated[Path, typer.Argument(help="入力TGAファイルまたはディレクトリ")],
    output: Annotated[Path | None, typer.Option("-o", "--output", help="出力先パス")] = None,
    output_format: Annotated[
        str | None, typer.Option("--format", help="出力形式（png/webp）")
    ] = None,
    strict: Annotated[bool, typer.Option(help="切り詰められたデータをエラーにする")] = False,
    config_path: Annotated[Path | None, typer.Option("--config", help="設定ファイル")] = None,
    verbose: Annotated[int, typer.Option("-v", "--verbose", count=True, help="詳細ログ出力")] = 0,
    quiet: Annotated[bool, typer.Option("-q", "--quiet", help="エラー以外を出力しない")] = False,
    log_file: Annotated[Path | None, typer.Option(help="ログファイル出力先")] = None,
) -> None:
    """TGA画像をPNG/WebPに変換する"""
    if not input_path.exists():
        console.print(f"[red]Error: パスが見つかりません: {input_path}[/red]")
        raise typer.Exit(ExitCode.ERROR)

    config = _load_config(config_path)
    format_name = (output_format or config.output.format).lower()
    try:
        fmt = OutputFormat(format_name)
    except ValueError:
        console.print(f"[red]Error: 未対応の出力形式です: {format_name}[/red]")
        raise typer.Exit(ExitCode.INVALID_INPUT) from None

    converter = TGAImageConverter(
        output_format=fmt,
        quality=config.output.quality,
        lossless_alpha=config.output.lossless_alpha,
        strict=strict or config.decode.strict,
    )

    level = VerboseLevel.QUIET if quiet else VerboseLevel(min(verbose, VerboseLevel.DEBUG))
    with (
        ConsoleLogger(LogConfig(verbose_level=level, log_file=log_file)) as logger,
        logger.capture_library_logs(),
    ):
        if input_path.is_dir():
            dest = output or input_path.with_name(f"{input_path.name}_{fmt.value}")
            result = _convert_directory(converter, input_path, dest, config, logger)
        else:
            dest = output or input_path.with_suffix(f".{fmt.value}")
            result = _convert_single(converter, input_path, dest, logger)

        if result.success:
            logger.info(result.message)
        else:
            logger.error(result.message)

    raise typer.Exit(result.exit_code)


def version_callback(value: bool) -> None:
    """バージョン表示コールバック"""
    if value:
        typer.echo(f"truevision {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="バージョンを表示する",
        ),
    ] = False,
) -> None:
    """truevision CLI - TGA画像デコーダー"""
    pass
