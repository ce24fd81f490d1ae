from typing import Sequence


UNITS: Sequence[str] = ("B", "KB", "MB", "GB", "TB")


def human_readable_size(num_bytes: float) -> str:
    size = float(num_bytes)
    unit = 0
    while size >= 1024.0 and unit < len(UNITS) - 1:
        size /= 1024.0
        unit += 1
    return f"{size:.2f} {UNITS[unit]}"


def format_number(num: int) -> str:
    digits = str(abs(int(num)))
    groups = []
    while len(digits) > 3:
        groups.append(digits[-3:])
        digits = digits[:-3]
    groups.append(digits)
    sign = "-" if num < 0 else ""
    return sign + ",".join(reversed(groups))
