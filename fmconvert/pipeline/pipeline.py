#!filepath: fmconvert/pipeline/pipeline.py
from __future__ import annotations

from pathlib import Path

from fmconvert.config.convert_config import ConvertConfig
from fmconvert.io.source import open_source
from fmconvert.observability.instrumentation import Instrumentation, NoOpInstrumentation
from fmconvert.pipeline.context import ConvertContext
from fmconvert.pipeline.result import ConvertResult
from fmconvert.pipeline.step import PipelineStep
from fmconvert.utils.errors import ConvertError
from fmconvert.utils.filesystem import FileSystem
from fmconvert.utils.logger import logs


class ConvertPipeline:
    """
    ConvertPipeline = 调度器

    - 严格串行：scan 完成并发布 schema 后才开始 encode
    - 任何 ConvertError 都转成失败的 ConvertResult，不终止进程
    - 不负责 Step 级计时
    """

    def __init__(
        self,
        steps: list[PipelineStep],
        cfg: ConvertConfig | None = None,
        inst: Instrumentation | None = None,
    ):
        self.steps = steps
        self.cfg = cfg or ConvertConfig()
        self.inst = inst if inst is not None else NoOpInstrumentation()

    def run(
        self,
        input_path: str | Path,
        matrix_path: str | Path,
        vector_path: str | Path,
    ) -> ConvertResult:
        input_path = Path(input_path)
        matrix_path = Path(matrix_path)
        vector_path = Path(vector_path)

        logs.info(f"[Pipeline] ====== START {input_path} ======")

        ctx = None
        try:
            ctx = ConvertContext(
                input_path=input_path,
                matrix_path=matrix_path,
                vector_path=vector_path,
                source=open_source(input_path, self.cfg),
            )
            for step in self.steps:
                ctx = step.run(ctx)

        except ConvertError as e:
            logs.error(f"[Pipeline] FAILED ({e.kind}): {e}")
            discarded = self._discard(ctx)
            return ConvertResult(
                ok=False,
                input_path=input_path,
                matrix_path=matrix_path,
                vector_path=vector_path,
                schema=ctx.schema if ctx is not None else None,
                rows_written=ctx.rows_written if ctx is not None else 0,
                values_written=ctx.values_written if ctx is not None else 0,
                error=e,
                outputs_discarded=discarded,
            )

        self.inst.generate_timeline_report(input_path.name)
        logs.info(f"[Pipeline] ====== DONE {input_path} ======")

        return ConvertResult(
            ok=True,
            input_path=input_path,
            matrix_path=matrix_path,
            vector_path=vector_path,
            schema=ctx.schema,
            rows_written=ctx.rows_written,
            values_written=ctx.values_written,
        )

    def _discard(self, ctx: ConvertContext | None) -> bool:
        """
        只删除本次运行打开过的输出文件（不删目录，不碰未打开的路径）
        """
        if ctx is None or not ctx.opened_outputs or not self.cfg.discard_on_failure:
            return False

        for p in ctx.opened_outputs:
            FileSystem.remove_file(p)
        logs.warning(f"[Pipeline] discarded partial outputs for {ctx.input_path}")
        return True
