"""圧縮/解凍ジョブ

CLIオプションから組み立てた設定を検証し、入力の読み込み、
エンジンの実行、出力の書き出しを順に行う。
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, BinaryIO

from ecu_lzss.codec.decoder import LZSSDecoder
from ecu_lzss.codec.encoder import LZSSEncoder
from ecu_lzss.codec.padding import PaddingMode
from ecu_lzss.errors import InvocationError, LZSSError
from ecu_lzss.logger import CodecLogger, LogConfig
from ecu_lzss.streams import read_input, write_output
from ecu_lzss.types import ExitCode


class CodecOperation(Enum):
    """実行する操作"""

    COMPRESS = "compress"
    DECOMPRESS = "decompress"


@dataclass(frozen=True)
class JobConfig:
    """ジョブ設定

    Attributes:
        operation: 圧縮または解凍
        input_path: 入力ファイルパス
        output_path: 出力ファイルパス
        use_stdio: 標準入出力を使うか（input_path/output_path とは併用不可）
        no_pad: 16バイト境界へのパディングを行わない
        exact_pad: no-op トークンでパディングする（no_pad とは併用不可）
        default_padding: どちらのフラグも無い場合のパディングモード
        output_size: 解凍サイズの上限（解凍時のみ）
    """

    operation: CodecOperation
    input_path: Path | None = None
    output_path: Path | None = None
    use_stdio: bool = False
    no_pad: bool = False
    exact_pad: bool = False
    default_padding: PaddingMode = PaddingMode.DEFAULT
    output_size: int | None = None

    @property
    def padding(self) -> PaddingMode:
        """フラグと既定値から決まるパディングモード"""
        if self.exact_pad:
            return PaddingMode.EXACT_PAD
        if self.no_pad:
            return PaddingMode.NO_PAD
        return self.default_padding


@dataclass
class JobResult:
    """ジョブ実行結果

    Attributes:
        success: 成功したか
        output_path: 出力ファイルパス（標準出力の場合や失敗時はNone）
        error_message: エラーメッセージ（成功時は空文字列）
        exit_code: CLIの終了コード
        statistics: 実行統計情報
    """

    success: bool
    output_path: Path | None = None
    error_message: str = ""
    exit_code: ExitCode = ExitCode.SUCCESS
    statistics: dict[str, Any] = field(default_factory=dict)


class CodecJob:
    """圧縮/解凍ジョブ

    使用例:
        >>> config = JobConfig(
        ...     operation=CodecOperation.COMPRESS,
        ...     input_path=Path("app.bin"),
        ...     output_path=Path("app.lzs"),
        ... )
        >>> job = CodecJob(config)
        >>> if not job.validate():
        ...     result = job.run()
    """

    def __init__(
        self,
        config: JobConfig,
        logger: CodecLogger | None = None,
        stdin: BinaryIO | None = None,
        stdout: BinaryIO | None = None,
    ) -> None:
        """ジョブを初期化する

        Args:
            config: ジョブ設定
            logger: ロガー（Noneの場合はデフォルト設定で生成）
            stdin: 標準入力の代わりに使うストリーム
            stdout: 標準出力の代わりに使うストリーム
        """
        self._config = config
        self._logger = logger if logger is not None else CodecLogger(LogConfig())
        self._stdin = stdin
        self._stdout = stdout

    @property
    def config(self) -> JobConfig:
        return self._config

    def validate(self) -> list[str]:
        """設定を検証し、エラーメッセージのリストを返す

        Returns:
            エラーメッセージのリスト（エラーがない場合は空リスト）
        """
        errors: list[str] = []
        config = self._config

        if config.use_stdio:
            if config.input_path is not None:
                errors.append("入力が複数指定されています（-s と -i は併用できません）")
            if config.output_path is not None:
                errors.append("出力が複数指定されています（-s と -o は併用できません）")
        else:
            if config.input_path is None:
                errors.append("入力ファイルを指定してください")
            if config.output_path is None:
                errors.append("出力ファイルを指定してください")

        if config.no_pad and config.exact_pad:
            errors.append("--no-pad と --exact-pad は同時に指定できません")

        if config.output_size is not None:
            if config.operation is not CodecOperation.DECOMPRESS:
                errors.append("--size は解凍時のみ指定できます")
            elif config.output_size < 0:
                errors.append(f"解凍サイズが不正です: {config.output_size}")

        return errors

    def run(self) -> JobResult:
        """ジョブを実行する

        Returns:
            ジョブ実行結果。失敗時は error_message と exit_code が設定される。
        """
        start_time = time.time()

        try:
            errors = self.validate()
            if errors:
                raise InvocationError(errors[0])

            data = read_input(self._config.input_path, self._stdin)
            self._logger.verbose(
                f"{self._config.operation.value}: {self._describe_input()} ({len(data)} bytes)"
            )

            match self._config.operation:
                case CodecOperation.COMPRESS:
                    output, statistics = self._compress(data)
                case CodecOperation.DECOMPRESS:
                    output, statistics = self._decompress(data)

            write_output(self._config.output_path, output, self._stdout)
        except InvocationError as e:
            self._logger.error(str(e))
            return JobResult(
                success=False,
                error_message=str(e),
                exit_code=ExitCode.INVALID_INPUT,
            )
        except LZSSError as e:
            self._logger.error(str(e))
            return JobResult(
                success=False,
                error_message=str(e),
                exit_code=ExitCode.ERROR,
            )

        statistics["total_time_seconds"] = round(time.time() - start_time, 3)
        self._logger.log_statistics(statistics)

        # 空入力では何も出力しないため、サイズも報告しない
        if self._config.operation is CodecOperation.COMPRESS and statistics["input_size"] > 0:
            self._logger.info(f"compressedSize {statistics['output_size']:x}")

        return JobResult(
            success=True,
            output_path=self._config.output_path,
            statistics=statistics,
        )

    def _compress(self, data: bytes) -> tuple[bytes, dict[str, Any]]:
        padding = self._config.padding
        result = LZSSEncoder(padding).encode(data)
        stats = result.statistics
        statistics: dict[str, Any] = {
            "input_size": result.input_size,
            "output_size": result.compressed_size,
            "padding": padding.value,
            "literals": stats.literals,
            "matches": stats.matches,
            "noops": stats.noops,
            "groups": stats.groups,
            "padding_bytes": stats.padding_bytes,
        }
        return result.data, statistics

    def _decompress(self, data: bytes) -> tuple[bytes, dict[str, Any]]:
        output = LZSSDecoder().decode(data, self._config.output_size)
        if self._config.output_size is not None and len(output) < self._config.output_size:
            self._logger.warning(
                f"入力が尽きたため解凍サイズが指定値に届きません: "
                f"{len(output)} < {self._config.output_size}"
            )
        statistics: dict[str, Any] = {
            "input_size": len(data),
            "output_size": len(output),
        }
        return output, statistics

    def _describe_input(self) -> str:
        if self._config.input_path is None:
            return "<stdin>"
        return str(self._config.input_path)
