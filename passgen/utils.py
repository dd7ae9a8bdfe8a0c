import json
import threading
import time

_log_lock = threading.Lock()


def log_event(path, event, **fields):
    """Append one JSON line describing ``event``. Never pass the password here."""
    entry = {"ts": time.time(), "event": event, **fields}
    line = json.dumps(entry) + "\n"

    with _log_lock, open(path, "a", encoding="utf-8") as f:
        f.write(line)


def parse_length(value, default, min_length, max_length):
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"length must be an integer, got {value!r}")
    if not min_length <= value <= max_length:
        raise ValueError(f"length must be between {min_length} and {max_length}")
    return value


def parse_options(value, default, names):
    """Options must be an object whose known flags are real booleans."""
    if value is None:
        return dict(default)
    if not isinstance(value, dict):
        raise ValueError("options must be an object")
    for name in names:
        if name in value and not isinstance(value[name], bool):
            raise ValueError(f"option {name!r} must be true or false, got {value[name]!r}")
    return value


def parse_limit(value):
    if value is None or value == "":
        return None
    try:
        limit = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"limit must be an integer, got {value!r}") from None
    if limit < 0:
        raise ValueError("limit must not be negative")
    return limit
