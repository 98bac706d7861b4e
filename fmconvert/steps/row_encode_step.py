# fmconvert/steps/row_encode_step.py
from __future__ import annotations

from fmconvert.adapters.convert_adapter import ConvertAdapter
from fmconvert.pipeline.context import ConvertContext
from fmconvert.pipeline.step import PipelineStep
from fmconvert.utils.errors import ConsistencyFault, ConvertIOError
from fmconvert.utils.filesystem import FileSystem
from fmconvert.utils.logger import logs


class RowEncodeStep(PipelineStep):
    """
    Pass 2：依据 ctx.schema 重读输入并写出 x / y

    前置条件：
      - ctx.schema 已由 SchemaScanStep 发布
      - 输入在两遍之间未被修改（由 TextSource 保证 / 校验）
    """

    def __init__(self, adapter: ConvertAdapter, inst=None):
        super().__init__(inst)
        self.adapter = adapter

    def run(self, ctx: ConvertContext) -> ConvertContext:
        if ctx.schema is None:
            raise ConsistencyFault(f"[{self.step_name}] schema missing, scan must run first")

        if not self.adapter.overwrite:
            for p in (ctx.matrix_path, ctx.vector_path):
                if FileSystem.file_exists(p):
                    raise ConvertIOError(p, "file exists")

        with self.timed():
            stats = self.adapter.encode(
                ctx.source,
                ctx.schema,
                ctx.matrix_path,
                ctx.vector_path,
                opened=ctx.opened_outputs,
            )

        ctx.rows_written = stats.rows
        ctx.values_written = stats.values

        self.inst.metrics.record("encode.matrix_bytes", stats.matrix_bytes)
        self.inst.metrics.record("encode.vector_bytes", stats.vector_bytes)
        logs.info(f"[{self.step_name}] wrote {ctx.matrix_path.name} / {ctx.vector_path.name}")
        return ctx
