"""CLI entry point for ecu-lzss."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from ecu_lzss import __version__
from ecu_lzss.codec.analysis import analyze_stream
from ecu_lzss.config import ConfigError, ToolConfig, get_default_config, load_config
from ecu_lzss.errors import IOFailure
from ecu_lzss.job import CodecJob, CodecOperation, JobConfig
from ecu_lzss.logger import CodecLogger, LogConfig, VerboseLevel
from ecu_lzss.streams import read_input
from ecu_lzss.types import ExitCode

app = typer.Typer(help="ECUファームウェア向けLZSS圧縮/解凍ツール")
console = Console()
err_console = Console(stderr=True)


def _load_tool_config(config_path: Path | None) -> ToolConfig:
    """設定ファイルを読み込む（未指定の場合はデフォルト）"""
    if config_path is None:
        return get_default_config()
    try:
        return load_config(config_path)
    except ConfigError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(ExitCode.INVALID_INPUT) from e


def _build_log_config(
    tool_config: ToolConfig, verbose: int, quiet: bool, log_file: Path | None
) -> LogConfig:
    """CLIオプションと設定ファイルからログ設定を組み立てる"""
    if quiet:
        level = VerboseLevel.QUIET
    elif verbose > 0:
        level = VerboseLevel(min(verbose, VerboseLevel.DEBUG))
    else:
        level = VerboseLevel(tool_config.log.verbose_level)

    if log_file is None and tool_config.log.log_file:
        log_file = Path(tool_config.log.log_file)

    return LogConfig(verbose_level=level, log_file=log_file, use_color=tool_config.log.use_color)


def _run_job(job_config: JobConfig, log_config: LogConfig, done_message: str) -> None:
    """ジョブを検証・実行し、結果に応じて終了する"""
    with CodecLogger(log_config) as logger:
        job = CodecJob(job_config, logger=logger)

        errors = job.validate()
        if errors:
            for error in errors:
                err_console.print(f"[red]Error: {error}[/red]")
            err_console.print('Enter "ecu-lzss --help" for help.')
            raise typer.Exit(ExitCode.INVALID_INPUT)

        result = job.run()

    if not result.success:
        raise typer.Exit(result.exit_code)

    if result.output_path is not None and log_config.verbose_level > VerboseLevel.QUIET:
        err_console.print(f"[green]{done_message}: {result.output_path}[/green]")
    raise typer.Exit(ExitCode.SUCCESS)


@app.command()
def compress(
    input_path: Annotated[Path | None, typer.Option("-i", "--input", help="入力ファイル")] = None,
    output: Annotated[Path | None, typer.Option("-o", "--output", help="出力ファイル")] = None,
    stdio: Annotated[bool, typer.Option("-s", "--stdio", help="標準入出力を使用")] = False,
    no_pad: Annotated[
        bool, typer.Option("-p", "--no-pad", help="16バイト境界へのパディングを行わない")
    ] = False,
    exact_pad: Annotated[
        bool, typer.Option("-e", "--exact-pad", help="解凍サイズが変わらない no-op でパディング")
    ] = False,
    config: Annotated[Path | None, typer.Option("-c", "--config", help="設定ファイル")] = None,
    verbose: Annotated[int, typer.Option("-v", "--verbose", count=True, help="詳細ログ出力")] = 0,
    quiet: Annotated[bool, typer.Option("-q", "--quiet", help="エラー以外を出力しない")] = False,
    log_file: Annotated[Path | None, typer.Option(help="ログファイル出力先")] = None,
) -> None:
    """入力を圧縮する"""
    tool_config = _load_tool_config(config)
    job_config = JobConfig(
        operation=CodecOperation.COMPRESS,
        input_path=input_path,
        output_path=output,
        use_stdio=stdio,
        no_pad=no_pad,
        exact_pad=exact_pad,
        default_padding=tool_config.padding_mode,
    )
    _run_job(job_config, _build_log_config(tool_config, verbose, quiet, log_file), "圧縮完了")


@app.command()
def decompress(
    input_path: Annotated[Path | None, typer.Option("-i", "--input", help="入力ファイル")] = None,
    output: Annotated[Path | None, typer.Option("-o", "--output", help="出力ファイル")] = None,
    stdio: Annotated[bool, typer.Option("-s", "--stdio", help="標準入出力を使用")] = False,
    size: Annotated[int | None, typer.Option("--size", help="解凍サイズの上限（バイト）")] = None,
    config: Annotated[Path | None, typer.Option("-c", "--config", help="設定ファイル")] = None,
    verbose: Annotated[int, typer.Option("-v", "--verbose", count=True, help="詳細ログ出力")] = 0,
    quiet: Annotated[bool, typer.Option("-q", "--quiet", help="エラー以外を出力しない")] = False,
    log_file: Annotated[Path | None, typer.Option(help="ログファイル出力先")] = None,
) -> None:
    """圧縮データを解凍する"""
    tool_config = _load_tool_config(config)
    job_config = JobConfig(
        operation=CodecOperation.DECOMPRESS,
        input_path=input_path,
        output_path=output,
        use_stdio=stdio,
        output_size=size,
    )
    _run_job(job_config, _build_log_config(tool_config, verbose, quiet, log_file), "解凍完了")


@app.command()
def inspect(
    input_path: Annotated[Path, typer.Argument(help="圧縮ファイル")],
) -> None:
    """圧縮ストリームの構成を表示する"""
    try:
        data = read_input(input_path)
    except IOFailure as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(ExitCode.ERROR) from e

    stats = analyze_stream(data)

    table = Table(title="Stream Info")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Compressed Size", f"{stats.compressed_size} (0x{stats.compressed_size:x})")
    table.add_row("16-byte Aligned", "yes" if stats.aligned else "no")
    table.add_row("Groups", str(stats.groups))

    table.add_section()
    table.add_row("Literals", str(stats.literals))
    table.add_row("Matches", str(stats.matches))
    table.add_row("No-op Tokens", str(stats.noops))
    if stats.matches:
        table.add_row("  Max Offset", str(stats.max_offset))
        table.add_row("  Max Length", str(stats.max_length))
    if stats.short_offsets:
        table.add_row("  Offset < 3", f"[yellow]{stats.short_offsets}[/yellow]")

    table.add_section()
    table.add_row("Decoded Size", str(stats.decoded_size))
    table.add_row("Ratio", f"{stats.ratio:.3f}")
    table.add_row("Trailing Bytes", str(stats.trailing_bytes))

    console.print(table)
    raise typer.Exit(ExitCode.SUCCESS)


def version_callback(value: bool) -> None:
    """バージョン表示コールバック"""
    if value:
        typer.echo(f"ecu-lzss {__version__}")
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
    """ecu-lzss CLI - ECUブートローダ互換のLZSS圧縮"""
    pass
