#!filepath: tests/observability/test_instrumentation.py

import time

from loguru import logger

from fmconvert.observability.instrumentation import Instrumentation, NoOpInstrumentation


def test_instrumentation_timer():
    inst = Instrumentation(enabled=True)

    with inst.timer("scan"):
        time.sleep(0.01)

    assert "scan" in inst.timeline
    assert inst.timeline["scan"] > 0


def test_parent_scope_is_not_recorded():
    inst = Instrumentation(enabled=True)

    with inst.timer("SchemaScanStep", record=False):
        with inst.timer("scan"):
            pass

    assert list(inst.timeline) == ["scan"]


def test_disabled_instrumentation_records_nothing():
    inst = Instrumentation(enabled=False)

    with inst.timer("scan"):
        pass
    inst.metrics.record("rows", 1)

    assert inst.timeline == {}
    assert inst.metrics.metrics == {}


def test_noop_instrumentation():
    inst = NoOpInstrumentation()

    with inst.timer("x"):
        pass
    inst.metrics.record("rows", 1)
    inst.progress.tick("encode", 1, 1)
    inst.generate_timeline_report("noop")

    assert inst.metrics.metrics == {}


def test_instrumentation_metrics():
    inst = Instrumentation(enabled=True)
    inst.metrics.record_many({"schema.num_rows": 3, "schema.num_values": 7})

    assert inst.metrics.metrics == {"schema.num_rows": 3, "schema.num_values": 7}


def test_progress_tick_every():
    inst = Instrumentation(enabled=True, progress_every=2)

    captured = []
    sink_id = logger.add(lambda msg: captured.append(str(msg)))
    for i in range(1, 6):
        inst.progress.tick("encode", i, 5, "rows")
    logger.remove(sink_id)

    output = "\n".join(captured)
    assert "encode: 2/5 rows" in output
    assert "encode: 4/5 rows" in output
    assert "encode: 3/5 rows" not in output


def test_generate_timeline_report():
    inst = Instrumentation(enabled=True)

    with inst.timer("encode"):
        time.sleep(0.005)

    captured = []
    sink_id = logger.add(lambda msg: captured.append(str(msg)))
    inst.generate_timeline_report("train.libfm")
    logger.remove(sink_id)

    output = "\n".join(captured)
    assert "encode" in output
    assert "Conversion timeline for train.libfm" in output
