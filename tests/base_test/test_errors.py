#!filepath: tests/base_test/test_errors.py
from fmconvert.utils.errors import ConsistencyFault, ConvertError, ConvertIOError, ParseError


def test_parse_error_message():
    e = ParseError("1 2:3 foo", 6, lineno=4, reason="unexpected trailing content")

    assert e.kind == "parse"
    assert 'line 4 "1 2:3 foo"' in str(e)
    assert "character 6 'f'" in str(e)


def test_parse_error_at_end_of_line():
    e = ParseError("", 0)
    assert "<eol>" in str(e)


def test_io_error_names_path():
    e = ConvertIOError("/tmp/out.x", "Permission denied")

    assert e.kind == "io"
    assert e.path == "/tmp/out.x"
    assert str(e) == "unable to open /tmp/out.x: Permission denied"


def test_taxonomy():
    for cls in (ConvertIOError, ParseError, ConsistencyFault):
        assert issubclass(cls, ConvertError)
    assert ConsistencyFault("x").kind == "consistency"
