KB = 1024
MB = KB * KB
GB = MB * KB
RATE_SYMBOL = "/s"


def valid_storage_units() -> list[str]:
    """
    Return a list of valid units for the cumulative totals.
    """
    return ["K", "Ki", "M", "Mi", "G", "Gi", "T", "Ti", "auto"]


def pad_float(number: float = 0.0, places: int = 2, width: int = 0) -> str:
    """
    Format a float with a fixed number of decimal places, zero-padded to width.
    """
    return f"{number:0{width}.{places}f}"


def format_rate(delta_bytes: int, time_delta_ms: int) -> str:
    """
    Turn a byte delta observed over time_delta_ms into a rate such as "12.3M/s".

    The tiers are exclusive lower bounds checked from the largest down, so a
    speed that sits exactly on a boundary falls into the next lower tier.
    """
    speed = int(delta_bytes / (time_delta_ms / 1000))

    if speed > 1000 * MB:
        unit, value = "G", pad_float(speed / GB, places=2)
    elif speed > 100 * MB:
        unit, value = "M", pad_float(speed / MB, places=0, width=3)
    elif speed > 10 * MB:
        unit, value = "M", pad_float(speed / MB, places=1, width=4)
    elif speed > 1 * MB:
        unit, value = "M", pad_float(speed / MB, places=2)
    elif speed > 100 * KB:
        unit, value = "K", pad_float(speed / KB, places=0, width=3)
    elif speed > 10 * KB:
        unit, value = "K", pad_float(speed / KB, places=1, width=4)
    else:
        unit, value = "K", pad_float(speed / KB, places=2)

    return f"{value}{unit}{RATE_SYMBOL}"


def rate_kbps(delta_bytes: int, time_delta_ms: int) -> int:
    """
    Whole KB/s for a byte delta, truncated the same way the formatter truncates.
    """
    return int(delta_bytes / (time_delta_ms / 1000)) // KB


def byte_converter(number: float, unit: str = "auto") -> str:
    """
    Convert a byte total to the given unit, e.g. "1.50 GiB".
    """
    if unit is None or unit == "auto":
        for prefix in ["", "Ki", "Mi", "Gi", "Ti", "Pi"]:
            if abs(number) < 1024.0:
                return f"{pad_float(number)} {prefix}B"
            number /= 1024
        return f"{pad_float(number)} EiB"

    divisor = 1024 if unit.endswith("i") else 1000
    powers = {"K": 1, "M": 2, "G": 3, "T": 4}
    power = powers.get(unit[0])
    if power is None:
        return f"{number} B"

    return f"{pad_float(number / (divisor**power))} {unit}B"
