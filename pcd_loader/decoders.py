"""
Payload decoders, one per DATA encoding.

A regular PCD payload is an array of structs (XYZRGB XYZRGB ...).
binary_compressed stores a struct of arrays instead (XX.. YY.. ZZ.. RGBRGB..),
so the two binary decoders address the same header table differently.
"""

import logging
import struct
from typing import Callable, Dict

import numpy as np

from .color import linear_rgb, srgb_to_linear, unpack_rgb
from .errors import PayloadError
from .header import PCDHeader
from .lzf import decompress_lzf
from .point_cloud import PointCloud, assemble

log = logging.getLogger(__name__)

POSITION_FIELDS = ("x", "y", "z")
NORMAL_FIELDS = ("normal_x", "normal_y", "normal_z")


def _strided(buf: bytes, dtype, start: int, stride: int, count: int) -> np.ndarray:
    dt = np.dtype(dtype)
    if count == 0:
        return np.empty(0, dtype=dt)
    end = start + (count - 1) * stride + dt.itemsize
    if start < 0 or end > len(buf):
        raise PayloadError(
            f"Payload too short: need {end} bytes, have {len(buf)}"
        )
    return np.ndarray(shape=(count,), dtype=dt, buffer=buf, offset=start, strides=(stride,))


def _decode_fields(header: PCDHeader, read: Callable, little_endian: bool) -> PointCloud:
    """
    Pull every recognised field group through `read(name, dtype, extra)`,
    which returns one value per point for field `name` shifted by `extra` bytes.
    """
    order = "<" if little_endian else ">"
    f32 = order + "f4"
    i32 = order + "i4"
    groups = {}

    if header.has(*POSITION_FIELDS):
        groups["position"] = np.stack([read(n, f32, 0) for n in POSITION_FIELDS], axis=-1)

    if header.has("rgb"):
        # packed 0x00RRGGBB: b at +0, g at +1, r at +2 of the slot
        r = read("rgb", np.uint8, 2) / 255.0
        g = read("rgb", np.uint8, 1) / 255.0
        b = read("rgb", np.uint8, 0) / 255.0
        groups["color"] = linear_rgb(r, g, b)

    if header.has(*NORMAL_FIELDS):
        groups["normal"] = np.stack([read(n, f32, 0) for n in NORMAL_FIELDS], axis=-1)

    if header.has("intensity"):
        groups["intensity"] = read("intensity", f32, 0)

    if header.has("label"):
        groups["label"] = read("label", i32, 0)

    return assemble(header.points, **groups)


def decode_binary(data: bytes, header: PCDHeader, little_endian: bool = True) -> PointCloud:
    def read(name, dtype, extra):
        start = header.header_len + header.row_offset(name) + extra
        return _strided(data, dtype, start, header.row_size, header.points)

    return _decode_fields(header, read, little_endian)


def decode_binary_compressed(data: bytes, header: PCDHeader, little_endian: bool = True) -> PointCloud:
    start = header.header_len
    if start + 8 > len(data):
        raise PayloadError("Missing compressed/decompressed size prefix")
    compressed_size, decompressed_size = struct.unpack_from("<II", data, start)
    start += 8
    if start + compressed_size > len(data):
        raise PayloadError(
            f"Compressed payload truncated: need {compressed_size} bytes, "
            f"have {len(data) - start}"
        )
    log.debug("LZF payload: %d -> %d bytes", compressed_size, decompressed_size)
    buf = decompress_lzf(data[start:start + compressed_size], decompressed_size)

    def read(name, dtype, extra):
        stride = header.size_of(name)
        return _strided(buf, dtype, header.column_block_start(name) + extra, stride, header.points)

    return _decode_fields(header, read, little_endian)


def _wrap_int32(value: int) -> int:
    return ((value + 2**31) % 2**32) - 2**31


def _ascii_rgb(token: str, rgb_type) -> int:
    value = float(token)
    if rgb_type == "F":
        return int(np.array([value], dtype=np.float32).view(np.int32)[0])
    return int(value) & 0xFFFFFFFF


def decode_ascii(data: bytes, header: PCDHeader, little_endian: bool = True) -> PointCloud:
    text = data[header.header_len:].decode("utf-8", errors="replace")
    rows = [line.split() for line in text.split("\n") if line.strip()]

    if header.points is not None and len(rows) != header.points:
        log.warning("ASCII payload has %d rows, header declares %d points", len(rows), header.points)

    def column(name):
        return header.column_index(name)

    position, normal, packed, intensity, label = [], [], [], [], []
    rgb_type = header.type_of("rgb") if header.has("rgb") else None

    for lineno, tokens in enumerate(rows):
        try:
            if header.has(*POSITION_FIELDS):
                position.extend(float(tokens[column(n)]) for n in POSITION_FIELDS)
            if header.has("rgb"):
                packed.append(_ascii_rgb(tokens[column("rgb")], rgb_type))
            if header.has(*NORMAL_FIELDS):
                normal.extend(float(tokens[column(n)]) for n in NORMAL_FIELDS)
            if header.has("intensity"):
                intensity.append(float(tokens[column("intensity")]))
            if header.has("label"):
                label.append(_wrap_int32(int(float(tokens[column("label")]))))
        except (IndexError, ValueError, OverflowError) as e:
            raise PayloadError(f"Bad ASCII row {lineno}: {e}")

    color = None
    if packed:
        color = srgb_to_linear(unpack_rgb(packed)).reshape(-1)

    return assemble(
        len(rows),
        position=position,
        normal=normal,
        color=color,
        intensity=intensity,
        label=label,
    )


DECODERS: Dict[str, Callable[..., PointCloud]] = {
    "ascii": decode_ascii,
    "binary": decode_binary,
    "binary_compressed": decode_binary_compressed,
}
