import os


def file_size(path):
    """On-disk size of ``path`` in bytes, or 0 when it cannot be statted."""
    try:
        return os.stat(path).st_size
    except (OSError, ValueError, TypeError):
        return 0


_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


def format_bytes(n):
    n = int(n or 0)
    if n <= 0:
        return "0 Bytes"
    value = float(n)
    unit = 0
    while value >= 1024 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{round(value, 2):g} {_SIZE_UNITS[unit]}"
