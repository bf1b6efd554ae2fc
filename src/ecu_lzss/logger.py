"""ログ出力のインターフェース定義

このモジュールは、圧縮/解凍処理の診断メッセージ出力を担当する。
標準出力は圧縮データの出力先になり得るため、メッセージはすべて標準エラーに出す。
VerboseLevel (詳細ログレベル)に応じて出力を制御する。
"""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import Any, TextIO


class VerboseLevel(IntEnum):
    """詳細ログレベル

    QUIET: エラーのみ出力（-qオプション）
    NORMAL: 圧縮サイズなどのサマリを出力
    VERBOSE: 処理内容も出力（-vオプション）
    DEBUG: トークン統計も出力（-vvオプション）
    """

    QUIET = -1
    NORMAL = 0
    VERBOSE = 1
    DEBUG = 2


@dataclass
class LogConfig:
    """ログ設定

    Attributes:
        verbose_level: ログの詳細度レベル
        log_file: ログ出力先ファイルパス（Noneの場合はファイル出力なし）
        use_color: エラー・警告にカラー出力を使用するか
    """

    verbose_level: VerboseLevel = VerboseLevel.NORMAL
    log_file: Path | None = None
    use_color: bool = True


class CodecLogger:
    """圧縮/解凍ログ出力クラス

    使用例:
        >>> config = LogConfig(verbose_level=VerboseLevel.VERBOSE)
        >>> with CodecLogger(config) as logger:
        ...     logger.info("compressedSize 10")
    """

    _ANSI_ESCAPE_PATTERN = re.compile(r"\x1b\[[0-9;]*m")
    _RED = "\x1b[31m"
    _YELLOW = "\x1b[33m"
    _RESET = "\x1b[0m"

    def __init__(self, config: LogConfig) -> None:
        """ロガーを初期化する

        Args:
            config: ログ設定
        """
        self._config = config
        self._log_file: TextIO | None = None
        if config.log_file:
            # クラス自体がコンテキストマネージャとして動作し、__exit__でファイルを閉じる
            self._log_file = open(config.log_file, "w", encoding="utf-8")  # noqa: SIM115

    def __enter__(self) -> CodecLogger:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    @property
    def config(self) -> LogConfig:
        """ログ設定を取得する"""
        return self._config

    def close(self) -> None:
        """ログファイルを閉じる"""
        if self._log_file:
            self._log_file.close()
            self._log_file = None

    def _print(self, message: str) -> None:
        print(message, file=sys.stderr)

    def _colorize(self, message: str, color: str) -> str:
        if not self._config.use_color:
            return message
        return f"{color}{message}{self._RESET}"

    def _log_to_file(self, level: str, message: str) -> None:
        """ファイルにログ出力する

        Args:
            level: ログレベル文字列
            message: 出力するメッセージ
        """
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
        self._print(self._colorize(f"エラー: {message}", self._RED))
        self._log_to_file("ERROR", message)

    def warning(self, message: str) -> None:
        """警告メッセージを出力する（QUIET以上）"""
        if self._config.verbose_level > VerboseLevel.QUIET:
            self._print(self._colorize(f"警告: {message}", self._YELLOW))
        self._log_to_file("WARNING", message)

    def log_statistics(self, statistics: dict[str, Any]) -> None:
        """統計情報をキー順に出力する（DEBUG以上）

        Args:
            statistics: 統計情報
        """
        for key in sorted(statistics):
            self.debug(f"  {key}: {statistics[key]}")
