from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from fmconvert.adapters.base_adapter import BaseAdapter
from fmconvert.core.types import Schema
from fmconvert.engines.row_encode_engine import RowEncodeEngine
from fmconvert.engines.schema_scan_engine import SchemaScanEngine
from fmconvert.engines.tokenizer_engine import LineTokenizer
from fmconvert.io.source import TextSource
from fmconvert.io.writers import DatasetWriter
from fmconvert.utils.logger import logs


@dataclass(frozen=True)
class EncodeStats:
    rows: int
    values: int
    matrix_bytes: int
    vector_bytes: int


class ConvertAdapter(BaseAdapter):
    """
    Adapter 层：
    - 负责 I/O（读取文本 pass / 写两个二进制文件）
    - 调用 Engine 做解析 / 维度发现 / 行编码
    - 不做失败后的清理决策（由 Pipeline 决定）
    """

    def __init__(
        self,
        tokenizer: LineTokenizer | None = None,
        overwrite: bool = True,
        inst=None,
    ):
        super().__init__(inst)
        self.tokenizer = tokenizer or LineTokenizer()
        self.overwrite = overwrite

    # ----------------------------------------------------------------------
    def scan(self, source: TextSource) -> Schema:
        logs.info(f"[Scan] 开始 pass 1: {source.name}")

        engine = SchemaScanEngine()
        with self.timer("scan"):
            schema = engine.scan(self.tokenizer.process_stream(source.lines()))

        logs.info(f"[Scan] {schema.summary()}")
        return schema

    # ----------------------------------------------------------------------
    def encode(
        self,
        source: TextSource,
        schema: Schema,
        matrix_path: Path,
        vector_path: Path,
        opened: list[Path] | None = None,
    ) -> EncodeStats:
        """
        opened: 调用方提供的列表，追加本次真正创建 / 截断的输出路径（失败时同样生效）
        """
        logs.info(f"[Encode] 开始 pass 2: {source.name} → {matrix_path}, {vector_path}")

        engine = RowEncodeEngine(schema)
        progress = self.inst.progress
        progress.start("encode", schema.num_rows, "rows")

        writer = DatasetWriter(matrix_path, vector_path, overwrite=self.overwrite)
        try:
            with self.timer("encode"), writer:
                writer.open(schema)

                rows = self.tokenizer.process_stream(source.lines())
                for encoded in engine.process_stream(rows):
                    writer.write_row(encoded.target, encoded.entries)
                    progress.tick("encode", engine.rows_encoded, schema.num_rows, "rows")

                stats = EncodeStats(
                    rows=engine.rows_encoded,
                    values=engine.values_encoded,
                    matrix_bytes=writer.matrix_writer.bytes_written,
                    vector_bytes=writer.vector_writer.bytes_written,
                )
        finally:
            if opened is not None:
                opened.extend(writer.opened_paths)

        progress.done("encode")
        logs.info(
            f"[Encode] rows={stats.rows} values={stats.values} "
            f"x_bytes={stats.matrix_bytes} y_bytes={stats.vector_bytes}"
        )
        return stats
