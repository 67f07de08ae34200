import time
from datetime import datetime


def get_human_timestamp() -> str:
    now = int(time.time())
    dt = datetime.fromtimestamp(now)
    return dt.strftime("%Y-%m-%d %H:%M:%S")


def elapsed_realtime_ms() -> int:
    """
    Return a monotonic clock reading in milliseconds, unaffected by wall clock changes.
    """
    return int(time.monotonic() * 1000)
