# fmconvert/steps/schema_scan_step.py
from __future__ import annotations

from dataclasses import asdict

from fmconvert.adapters.convert_adapter import ConvertAdapter
from fmconvert.pipeline.context import ConvertContext
from fmconvert.pipeline.step import PipelineStep


class SchemaScanStep(PipelineStep):
    """
    Pass 1：扫描整个输入，发布 ctx.schema

    失败（ParseError / ConvertIOError）直接向上抛出，不产生任何输出文件。
    """

    def __init__(self, adapter: ConvertAdapter, inst=None):
        super().__init__(inst)
        self.adapter = adapter

    def run(self, ctx: ConvertContext) -> ConvertContext:
        with self.timed():
            ctx.schema = self.adapter.scan(ctx.source)

        self.inst.metrics.record_many(
            {f"schema.{k}": v for k, v in asdict(ctx.schema).items()}
        )
        return ctx
