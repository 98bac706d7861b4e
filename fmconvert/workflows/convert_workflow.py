#!filepath: fmconvert/workflows/convert_workflow.py
from __future__ import annotations

from pathlib import Path

from fmconvert.adapters.convert_adapter import ConvertAdapter
from fmconvert.config.app_config import AppConfig
from fmconvert.engines.tokenizer_engine import LineTokenizer
from fmconvert.observability.instrumentation import Instrumentation
from fmconvert.pipeline.pipeline import ConvertPipeline
from fmconvert.pipeline.result import ConvertResult
from fmconvert.steps.row_encode_step import RowEncodeStep
from fmconvert.steps.schema_scan_step import SchemaScanStep


def build_convert_pipeline(
    cfg: AppConfig | None = None,
    inst: Instrumentation | None = None,
) -> ConvertPipeline:
    """
    libFM text → binary Pipeline

    Semantic Order (LAW):
        SchemaScan   (pass 1: num_rows / num_values / num_features / target range)
        → RowEncode  (pass 2: headers first, then rows in input order)
    """
    cfg = cfg or AppConfig.load()
    convert_cfg = cfg.convert
    inst = inst or Instrumentation(progress_every=convert_cfg.progress_every)

    adapter = ConvertAdapter(
        tokenizer=LineTokenizer(),
        overwrite=convert_cfg.overwrite,
        inst=inst,
    )

    steps = [
        SchemaScanStep(adapter=adapter, inst=inst),
        RowEncodeStep(adapter=adapter, inst=inst),
    ]

    return ConvertPipeline(steps=steps, cfg=convert_cfg, inst=inst)


def convert_file(
    ifile: str | Path,
    ofilex: str | Path,
    ofiley: str | Path,
    cfg: AppConfig | None = None,
) -> ConvertResult:
    """
    ifile → (ofilex, ofiley)；失败时返回 ok=False 的结果，不抛异常
    """
    return build_convert_pipeline(cfg).run(ifile, ofilex, ofiley)
