"""設定ファイル読み込みのテスト"""

from pathlib import Path

import pytest

from ecu_lzss.codec.padding import PaddingMode
from ecu_lzss.config import (
    ConfigError,
    LoggingConfig,
    ToolConfig,
    get_default_config,
    load_config,
)


class TestDefaultConfig:
    """デフォルト設定のテスト"""

    def test_get_default_config_returns_tool_config(self) -> None:
        assert isinstance(get_default_config(), ToolConfig)

    def test_default_padding(self) -> None:
        config = get_default_config()
        assert config.padding == "default"
        assert config.padding_mode is PaddingMode.DEFAULT

    def test_default_logging_config(self) -> None:
        config = get_default_config()
        assert config.log == LoggingConfig(verbose_level=0, log_file=None, use_color=True)


class TestLoadConfig:
    """設定読み込みのテスト"""

    def test_load_config_valid_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "ecu-lzss.yml"
        config_file.write_text(
            "padding: exact-pad\nlog:\n  verbose_level: 2\n  log_file: codec.log\n  use_color: false\n"
        )

        config = load_config(config_file)
        assert config.padding_mode is PaddingMode.EXACT_PAD
        assert config.log.verbose_level == 2
        assert config.log.log_file == "codec.log"
        assert config.log.use_color is False

    def test_load_config_partial_merges_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "ecu-lzss.yml"
        config_file.write_text("log:\n  use_color: false\n")

        config = load_config(config_file)
        assert config.padding_mode is PaddingMode.DEFAULT
        assert config.log.verbose_level == 0
        assert config.log.use_color is False

    def test_load_config_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="見つかりません"):
            load_config(tmp_path / "nonexistent.yml")

    def test_load_config_invalid_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "invalid.yml"
        config_file.write_text("this is not valid yaml: [")

        with pytest.raises(ConfigError, match="YAML"):
            load_config(config_file)

    def test_load_config_empty_file(self, tmp_path: Path) -> None:
        """空のファイルはデフォルト設定を返す"""
        config_file = tmp_path / "empty.yml"
        config_file.write_text("")
        assert load_config(config_file) == get_default_config()

    def test_load_config_not_mapping(self, tmp_path: Path) -> None:
        config_file = tmp_path / "list.yml"
        config_file.write_text("- padding\n- no-pad\n")

        with pytest.raises(ConfigError, match="マッピング"):
            load_config(config_file)

    @pytest.mark.parametrize(
        "content",
        [
            pytest.param("padding: zero\n", id="不明なパディング"),
            pytest.param("log:\n  verbose_level: 5\n", id="範囲外の詳細レベル"),
            pytest.param("log:\n  verbose_level: loud\n", id="文字列の詳細レベル"),
        ],
    )
    def test_load_config_invalid_values(self, tmp_path: Path, content: str) -> None:
        config_file = tmp_path / "ecu-lzss.yml"
        config_file.write_text(content)

        with pytest.raises(ConfigError):
            load_config(config_file)

    def test_load_config_log_not_mapping(self, tmp_path: Path) -> None:
        """logがマッピングでない場合はデフォルトを使う"""
        config_file = tmp_path / "ecu-lzss.yml"
        config_file.write_text("padding: no-pad\nlog: verbose\n")

        config = load_config(config_file)
        assert config.padding_mode is PaddingMode.NO_PAD
        assert config.log == LoggingConfig()
