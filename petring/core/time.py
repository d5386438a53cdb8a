import datetime as dt
import time


def now_rfc3339() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat()


def unix_now() -> int:
    return int(time.time())
