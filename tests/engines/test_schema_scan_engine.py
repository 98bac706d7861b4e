#!filepath: tests/engines/test_schema_scan_engine.py
import math

import pytest

from fmconvert.core.types import Schema
from fmconvert.engines.schema_scan_engine import SchemaScanEngine
from fmconvert.engines.tokenizer_engine import LineTokenizer
from fmconvert.utils.errors import ParseError


def _scan(lines):
    return SchemaScanEngine().scan(LineTokenizer().process_stream(lines))


def test_scan_sample(sample_lines):
    schema = _scan(sample_lines)

    assert schema.num_rows == 4
    assert schema.num_values == 6
    assert schema.num_features == 13
    assert schema.min_target == -2.5
    assert schema.max_target == 40.0


def test_comment_and_blank_lines_do_not_count():
    schema = _scan(["# only", "", "   ", "1 0:1"])
    assert schema.num_rows == 1
    assert schema.num_features == 1


def test_zero_rows_gives_empty_schema():
    schema = _scan(["# nothing", ""])

    assert schema == Schema.empty()
    assert math.isinf(schema.min_target) and schema.min_target > 0
    assert math.isinf(schema.max_target) and schema.max_target < 0


def test_rows_without_features():
    schema = _scan(["1", "2", "3"])

    assert schema.num_rows == 3
    assert schema.num_values == 0
    assert schema.num_features == 0


def test_feature_zero_counts_as_feature():
    schema = _scan(["1 0:5"])
    assert schema.num_features == 1


def test_max_row_size_counts_duplicate_ids():
    schema = _scan(["1 0:1 0:2", "2 1:1", "3"])

    assert schema.num_features == 2
    assert schema.max_row_size == 2


def test_targets_compared_as_float32():
    schema = _scan(["0.1", "0.2"])
    # float32(0.1) 不等于 python 的 0.1
    assert schema.min_target == pytest.approx(0.1, rel=1e-6)
    assert schema.min_target != 0.1


def test_scan_fails_fast_on_parse_error():
    engine = SchemaScanEngine()
    with pytest.raises(ParseError):
        engine.scan(LineTokenizer().process_stream(["1 1:1", "abc 1:2", "2 2:2"]))

    # 只处理到出错前
    assert engine.num_rows == 1


def test_scan_resets_between_runs():
    engine = SchemaScanEngine()
    tok = LineTokenizer()
    engine.scan(tok.process_stream(["1 5:1"]))
    schema = engine.scan(tok.process_stream(["2 1:1"]))

    assert schema.num_rows == 1
    assert schema.num_features == 2


def test_summary_format():
    schema = _scan(["1.0 3:0.5 7:2.0"])
    assert schema.summary() == (
        "num_rows=1\tnum_values=2\tnum_features=8\tmin_target=1\tmax_target=1"
    )
