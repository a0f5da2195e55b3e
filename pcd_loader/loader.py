import logging
from pathlib import Path
from typing import Union

from .config import LoaderConfig
from .decoders import DECODERS
from .header import parse_header
from .point_cloud import PointCloud

log = logging.getLogger(__name__)


class PCDLoader:
    """
    Decodes PCD buffers (ascii, binary, binary_compressed) into PointCloud records.

    Holds no state besides the endianness setting, so one instance can be
    shared between callers.
    """

    def __init__(self, little_endian: bool = True):
        self.little_endian = little_endian

    @classmethod
    def from_config(cls, config: LoaderConfig) -> "PCDLoader":
        return cls(little_endian=config.little_endian)

    def parse(self, data) -> PointCloud:
        buf = bytes(data)
        header = parse_header(buf)
        decoder = DECODERS[header.data]
        cloud = decoder(buf, header, self.little_endian)
        log.debug(
            "Decoded %d points (%s) with %s",
            cloud.point_count, ", ".join(cloud.attributes()) or "no attributes", header.data,
        )
        return cloud

    def load(self, path: Union[str, Path]) -> PointCloud:
        with open(path, "rb") as f:
            data = f.read()
        log.debug("Read %d bytes from %s", len(data), path)
        return self.parse(data)


def load_pcd(path: Union[str, Path], little_endian: bool = True) -> PointCloud:
    return PCDLoader(little_endian=little_endian).load(path)
