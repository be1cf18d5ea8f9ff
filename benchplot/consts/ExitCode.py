from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    MISSING_DATA = 2
    INVALID_DATA = 3
    PERMISSION_DENIED = 4
    PLOT_FAILED = 5
    EXPORT_FAILED = 6
