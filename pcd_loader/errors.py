class PCDError(Exception):
    """Base class for everything that can go wrong while decoding a PCD buffer."""


class HeaderError(PCDError):
    """The text header is missing its DATA line or carries an unparsable value."""


class SchemaError(PCDError):
    """FIELDS / SIZE / COUNT / TYPE do not describe a consistent layout."""


class DecompressionError(PCDError):
    """Malformed LZF stream (truncated input, bad back-reference, size mismatch)."""


class PayloadError(PCDError):
    """The payload after the header is shorter than the header says, or unparsable."""
