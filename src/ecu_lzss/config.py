"""Configuration module for ecu-lzss."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ecu_lzss.codec.padding import PaddingMode


class ConfigError(Exception):
    """設定ファイル読み込みエラー"""

    pass


@dataclass(frozen=True)
class LoggingConfig:
    """ログ設定"""

    verbose_level: int = 0
    log_file: str | None = None
    use_color: bool = True


@dataclass(frozen=True)
class ToolConfig:
    """ルート設定"""

    padding: str = PaddingMode.DEFAULT.value
    log: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def padding_mode(self) -> PaddingMode:
        """パディングモードを列挙型で取得する"""
        return PaddingMode(self.padding)


def load_config(path: Path) -> ToolConfig:
    """設定ファイルを読み込む

    Args:
        path: 設定ファイルパス

    Returns:
        ToolConfig: 読み込んだ設定（デフォルトとマージ済み）

    Raises:
        ConfigError: ファイル読み込みまたはパースエラー、値が不正な場合
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

    padding = data.get("padding", default.padding)
    valid = [mode.value for mode in PaddingMode]
    if padding not in valid:
        raise ConfigError(f"不明なパディングモードです: {padding} (有効値: {', '.join(valid)})")

    return ToolConfig(
        padding=padding,
        log=_merge_logging_config(data.get("log", {}), default.log),
    )


def get_default_config() -> ToolConfig:
    """デフォルト設定を取得する"""
    return ToolConfig()


def _merge_logging_config(data: dict[str, Any], default: LoggingConfig) -> LoggingConfig:
    """ログ設定をマージする"""
    if not isinstance(data, dict):
        return default
    verbose_level = data.get("verbose_level", default.verbose_level)
    if not isinstance(verbose_level, int) or not -1 <= verbose_level <= 2:
        raise ConfigError(f"verbose_level は -1 から 2 の整数で指定してください: {verbose_level}")
    return LoggingConfig(
        verbose_level=verbose_level,
        log_file=data.get("log_file", default.log_file),
        use_color=data.get("use_color", default.use_color),
    )
