from datetime import datetime, timezone


def make_log_tag(file, resource, method, ip, actor, **kwargs):
    # Base tag
    log_tag = (
        f"[{file}]"
        f"[{resource}]"
        f"[{method}]"
        f"[ip:{ip}]"
        f"[actor:{actor}]"
    )

    # Append extra context fields
    for key, value in kwargs.items():
        log_tag += f"[{key}:{value}]"

    return log_tag


def utc_now_iso():
    """Current UTC time as an ISO-8601 string with millisecond precision, e.g. 2024-01-31T09:15:02.123Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
