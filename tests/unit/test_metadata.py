import pytest

from kvcli.errors import ErrorKind
from kvcli.errors import MetadataHintError
from kvcli.errors import MetadataParseError
from kvcli.metadata import looks_like_unquoted_string
from kvcli.metadata import parse_metadata


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("true", True),
        ("false", False),
        ("123.456", 123.456),
        ('"some string"', "some string"),
        ("[1, 2]", [1, 2]),
        ('{"key": "value"}', {"key": "value"}),
    ],
)
def test_metadata_parser_legal(raw, expected):
    assert parse_metadata(raw).value == expected


def test_json_null_is_metadata_not_absence():
    metadata = parse_metadata("null")

    assert metadata is not None
    assert metadata.value is None


@pytest.mark.parametrize("raw", ["something", "{key: 123}", "[1, 2", "NaN", "Infinity", "-Infinity"])
def test_metadata_parser_illegal(raw):
    with pytest.raises(MetadataParseError):
        parse_metadata(raw)


@pytest.mark.parametrize("raw", ["abc", "'abc'", "'abc", "abc'", '"abc', 'abc"'])
def test_unquoted_string_error_message(raw):
    with pytest.raises(MetadataHintError) as exc_info:
        parse_metadata(raw)

    assert str(exc_info.value) == f"did you remember to double quote strings, like --metadata '\"{raw}\"'"
    assert exc_info.value.kind is ErrorKind.METADATA_HINT


@pytest.mark.parametrize("raw", ["{key: 123}", "[1, 2", "abc'\n"])
def test_structural_errors_keep_decoder_message(raw):
    with pytest.raises(MetadataParseError) as exc_info:
        parse_metadata(raw)

    assert not isinstance(exc_info.value, MetadataHintError)
    assert exc_info.value.kind is ErrorKind.METADATA_RAW
    assert "did you remember" not in str(exc_info.value)
    assert "line 1" in str(exc_info.value)


def test_no_metadata_flag_returns_none():
    assert parse_metadata(None) is None


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("abc", True),
        ("'abc'", True),
        ('"abc', True),
        ("hello world", True),
        ("", True),
        ("ab'c", False),
        ("a\"b", False),
        ("{abc}", False),
        ("[abc", False),
        ("''abc", False),
        ("abc'\n", False),
    ],
)
def test_looks_like_unquoted_string(raw, expected):
    assert looks_like_unquoted_string(raw) is expected


@pytest.mark.parametrize("raw", ["[NaN]", '{"ratio": Infinity}'])
def test_non_finite_constants_inside_containers_are_rejected(raw):
    with pytest.raises(MetadataParseError) as exc_info:
        parse_metadata(raw)

    assert not isinstance(exc_info.value, MetadataHintError)
    assert "is not a valid JSON value" in str(exc_info.value)
