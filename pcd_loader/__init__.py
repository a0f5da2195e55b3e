from .config import LoaderConfig, load_config
from .errors import DecompressionError, HeaderError, PayloadError, PCDError, SchemaError
from .header import PCDHeader, parse_header
from .loader import PCDLoader, load_pcd
from .lzf import decompress_lzf
from .point_cloud import PointCloud

__all__ = [
    "PCDLoader",
    "load_pcd",
    "PointCloud",
    "PCDHeader",
    "parse_header",
    "decompress_lzf",
    "LoaderConfig",
    "load_config",
    "PCDError",
    "HeaderError",
    "SchemaError",
    "DecompressionError",
    "PayloadError",
]
