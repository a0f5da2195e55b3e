import pytest

from pcd_loader import HeaderError, SchemaError, parse_header
from pcd_builders import pcd_header


def test_parses_full_header():
    data = pcd_header(["x", "y", "z", "rgb"], [4, 4, 4, 4], ["F", "F", "F", "U"],
                      "binary", points=10, width=10)
    h = parse_header(data + b"\x00" * 160)

    assert h.data == "binary"
    assert h.version == "0.7"
    assert h.fields == ("x", "y", "z", "rgb")
    assert h.size == (4, 4, 4, 4)
    assert h.type == ("F", "F", "F", "U")
    assert h.count == (1, 1, 1, 1)
    assert h.width == 10 and h.height == 1
    assert h.viewpoint == (0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0)
    assert h.points == 10
    assert h.header_len == len(data)
    assert h.field_offset == {"x": 0, "y": 4, "z": 8, "rgb": 12}
    assert h.row_size == 16


def test_points_from_width_and_height():
    data = b"FIELDS x\nSIZE 4\nTYPE F\nWIDTH 4\nHEIGHT 2\nDATA binary\n"
    assert parse_header(data).points == 8


def test_missing_point_count_is_an_error_for_binary():
    data = b"FIELDS x\nSIZE 4\nTYPE F\nDATA binary\n"
    with pytest.raises(HeaderError):
        parse_header(data)


def test_missing_point_count_is_left_open_for_ascii():
    data = b"FIELDS x\nSIZE 4\nTYPE F\nDATA ascii\n1\n"
    assert parse_header(data).points is None


def test_ascii_offsets_are_column_indices():
    data = b"FIELDS x y z\nSIZE 4 4 4\nTYPE F F F\nPOINTS 1\nDATA ascii\n"
    h = parse_header(data)
    assert h.field_offset == {"x": 0, "y": 1, "z": 2}
    assert h.row_size == 0


def test_row_offset_and_column_block_start_use_count():
    data = (b"FIELDS x foo y\nSIZE 4 2 4\nTYPE F U F\nCOUNT 1 3 1\n"
            b"POINTS 5\nDATA binary_compressed\n")
    h = parse_header(data)
    assert h.row_offset("y") == 10
    assert h.row_size == 14
    assert h.column_block_start("x") == 0
    assert h.column_block_start("y") == 50


def test_header_len_counts_bytes_not_characters():
    data = "# café ☃\nFIELDS x\nSIZE 4\nTYPE F\nPOINTS 1\nDATA binary\n".encode("utf-8")
    assert parse_header(data + b"\x00\x00\x80\x3f").header_len == len(data)


def test_keywords_are_case_insensitive_and_comments_stripped():
    data = (b"# DATA binary would end the header if comments were kept\n"
            b"fields x y z # trailing\nsize 4 4 4\ntype F F F\npoints 2\ndata Binary\n")
    h = parse_header(data)
    assert h.data == "binary"
    assert h.fields == ("x", "y", "z")
    assert h.points == 2


def test_crlf_line_endings():
    data = b"FIELDS x y z\r\nSIZE 4 4 4\r\nTYPE F F F\r\nPOINTS 1\r\nDATA binary\r\n"
    h = parse_header(data)
    assert h.header_len == len(data)
    assert h.fields == ("x", "y", "z")


def test_invalid_bytes_in_header_are_tolerated():
    data = b"# \xff\xfe\nFIELDS x\nSIZE 4\nTYPE F\nPOINTS 0\nDATA binary\n"
    assert parse_header(data).fields == ("x",)


def test_no_data_line():
    with pytest.raises(HeaderError):
        parse_header(b"FIELDS x\nSIZE 4\nPOINTS 1\n")


def test_data_line_without_value():
    with pytest.raises(HeaderError):
        parse_header(b"FIELDS x\nSIZE 4\nPOINTS 1\nDATA\n")


def test_unsupported_encoding():
    with pytest.raises(HeaderError):
        parse_header(b"FIELDS x\nSIZE 4\nPOINTS 1\nDATA binary_lz4\n")


def test_unparsable_number():
    with pytest.raises(HeaderError):
        parse_header(b"FIELDS x\nSIZE four\nPOINTS 1\nDATA binary\n")


@pytest.mark.parametrize("header", [
    b"FIELDS x y\nSIZE 4\nTYPE F F\nPOINTS 1\nDATA binary\n",
    b"FIELDS x y\nSIZE 4 4\nTYPE F F\nCOUNT 1\nPOINTS 1\nDATA binary\n",
    b"FIELDS x y\nSIZE 4 4\nTYPE F\nPOINTS 1\nDATA binary\n",
    b"FIELDS x x\nSIZE 4 4\nTYPE F F\nPOINTS 1\nDATA binary\n",
    b"FIELDS x y\nTYPE F F\nPOINTS 1\nDATA binary\n",
])
def test_inconsistent_schema(header):
    with pytest.raises(SchemaError):
        parse_header(header)
