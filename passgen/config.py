import os


def env_int(name, default, minimum=1):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}")
    return value


SETTINGS = {
    "history_cap": env_int("PASSGEN_HISTORY_CAP", 20),
    "min_length": 4,
    "max_length": 64,
    "default_length": 12,
    "default_options": {
        "upper": True,
        "lower": True,
        "numbers": True,
        "symbols": False,
    },
}

DB_PATH = os.getenv("PASSGEN_DB", "passgen.db")
EVENTS_LOG = os.getenv("PASSGEN_EVENTS_LOG", "events.log")
