from enum import Enum


class ThroughputType(Enum):
    """Criterion throughput kinds, valued by their tag in ``benchmark.json``."""
    # bytes/second, reported with binary prefixes by Criterion
    BYTES = "Bytes"
    # bytes/second, reported with decimal prefixes by Criterion
    BYTES_DECIMAL = "BytesDecimal"
    # elements/second, e.g. collection size or number of parsed values
    ELEMENTS = "Elements"

    def axis_unit(self, element_unit: str) -> str:
        if self is ThroughputType.ELEMENTS:
            return f"{element_unit}/s"
        return "B/s"
