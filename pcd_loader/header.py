import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from .errors import HeaderError, SchemaError

log = logging.getLogger(__name__)

ENCODINGS = ("ascii", "binary", "binary_compressed")
KEYWORDS = ("VERSION", "FIELDS", "SIZE", "TYPE", "COUNT", "WIDTH", "HEIGHT", "VIEWPOINT", "POINTS")


@dataclass(frozen=True)
class PCDHeader:
    """
    Typed schema of a PCD header.

    header_len is a byte offset into the original buffer: the first byte
    after the newline that terminates the DATA line.
    """
    data: str
    header_len: int
    points: Optional[int]
    fields: Tuple[str, ...] = ()
    size: Tuple[int, ...] = ()
    type: Tuple[str, ...] = ()
    count: Tuple[int, ...] = ()
    version: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    viewpoint: Optional[Tuple[float, ...]] = None
    field_offset: Dict[str, int] = field(default_factory=dict)
    row_size: int = 0

    def has(self, *names: str) -> bool:
        return all(n in self.field_offset for n in names)

    def column_index(self, name: str) -> int:
        """Whitespace-token column of `name` in an ascii row."""
        return self.fields.index(name)

    def row_offset(self, name: str) -> int:
        """Byte offset of `name` inside one interleaved row."""
        i = self.fields.index(name)
        return sum(s * c for s, c in zip(self.size[:i], self.count[:i]))

    def column_block_start(self, name: str) -> int:
        """Start of `name`'s contiguous block in a column-major payload."""
        return self.points * self.row_offset(name)

    def type_of(self, name: str) -> Optional[str]:
        i = self.fields.index(name)
        if i < len(self.type):
            return self.type[i]
        return None

    def size_of(self, name: str) -> int:
        """Byte width of one element of `name`."""
        return self.size[self.fields.index(name)]


def iter_header_lines(data: bytes) -> Iterator[Tuple[List[str], int]]:
    """Yield (tokens, end_offset) per line with comments removed."""
    pos = 0
    n = len(data)
    while pos < n:
        nl = data.find(b"\n", pos)
        end = n if nl == -1 else nl + 1
        text = data[pos:end].decode("utf-8", errors="replace")
        text = text.split("#", 1)[0]
        yield text.split(), end
        pos = end


def _ints(key: str, values: List[str]) -> Tuple[int, ...]:
    try:
        return tuple(int(v) for v in values)
    except ValueError:
        raise HeaderError(f"Invalid integer in {key}: {' '.join(values)}")


def _int(key: str, values: List[str]) -> int:
    if not values:
        raise HeaderError(f"{key} has no value")
    return _ints(key, values[:1])[0]


def parse_header(data: bytes) -> PCDHeader:
    entries: Dict[str, List[str]] = {}
    encoding = None
    header_len = None

    for tokens, end in iter_header_lines(data):
        if not tokens:
            continue
        key = tokens[0].upper()
        if key == "DATA":
            if len(tokens) < 2:
                raise HeaderError("DATA line has no encoding")
            encoding = tokens[1].lower()
            header_len = end
            break
        if key in KEYWORDS and key not in entries:
            entries[key] = tokens[1:]

    if header_len is None:
        raise HeaderError("PCD header has no DATA line")
    if encoding not in ENCODINGS:
        raise HeaderError(f"Unsupported DATA encoding: {encoding}")

    fields = tuple(entries.get("FIELDS", []))
    size = _ints("SIZE", entries["SIZE"]) if "SIZE" in entries else ()
    types = tuple(t.upper() for t in entries.get("TYPE", []))
    count = _ints("COUNT", entries["COUNT"]) if "COUNT" in entries else (1,) * len(fields)

    width = _int("WIDTH", entries["WIDTH"]) if "WIDTH" in entries else None
    height = _int("HEIGHT", entries["HEIGHT"]) if "HEIGHT" in entries else None
    if "POINTS" in entries:
        points = _int("POINTS", entries["POINTS"])
    elif width is not None and height is not None:
        points = width * height
    elif encoding == "ascii":
        # rows are counted by the ascii decoder
        points = None
    else:
        raise HeaderError("PCD header has neither POINTS nor WIDTH/HEIGHT")
    if points is not None and points < 0:
        raise HeaderError(f"Negative point count: {points}")

    viewpoint = None
    if "VIEWPOINT" in entries:
        try:
            viewpoint = tuple(float(v) for v in entries["VIEWPOINT"])
        except ValueError:
            raise HeaderError(f"Invalid VIEWPOINT: {' '.join(entries['VIEWPOINT'])}")

    version = " ".join(entries["VERSION"]) if "VERSION" in entries else None

    _check_schema(fields, size, types, count, encoding)

    field_offset: Dict[str, int] = {}
    row_size = 0
    for i, name in enumerate(fields):
        if encoding == "ascii":
            field_offset[name] = i
        else:
            field_offset[name] = row_size
            row_size += size[i] * count[i]

    header = PCDHeader(
        data=encoding,
        header_len=header_len,
        points=points,
        fields=fields,
        size=size,
        type=types,
        count=count,
        version=version,
        width=width,
        height=height,
        viewpoint=viewpoint,
        field_offset=field_offset,
        row_size=row_size,
    )
    log.debug(
        "PCD header: data=%s points=%s fields=%s row_size=%d header_len=%d",
        encoding, points, " ".join(fields), row_size, header_len,
    )
    return header


def _check_schema(fields, size, types, count, encoding) -> None:
    if len(set(fields)) != len(fields):
        raise SchemaError(f"Duplicate names in FIELDS: {' '.join(fields)}")
    if len(count) != len(fields):
        raise SchemaError(f"COUNT has {len(count)} entries for {len(fields)} fields")
    if types and len(types) != len(fields):
        raise SchemaError(f"TYPE has {len(types)} entries for {len(fields)} fields")
    if size and len(size) != len(fields):
        raise SchemaError(f"SIZE has {len(size)} entries for {len(fields)} fields")
    if encoding != "ascii" and fields and not size:
        raise SchemaError(f"SIZE is required for DATA {encoding}")
