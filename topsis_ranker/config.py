import os

DEFAULTS = {
    "SENDER_EMAIL": None,
    "SENDER_PASSWORD": None,
    "SMTP_HOST": "smtp.gmail.com",
    "SMTP_PORT": 465,
    "MAX_CONTENT_LENGTH": 16 * 1024 * 1024,
    "LOG_LEVEL": "INFO",
    "PREVIEW_ROWS": 5,
}

INT_SETTINGS = ("SMTP_PORT", "MAX_CONTENT_LENGTH", "PREVIEW_ROWS")


def load_config(environ=None):
    """Read the service settings from the environment, falling back to DEFAULTS."""
    if environ is None:
        environ = os.environ

    config = dict(DEFAULTS)
    for key in DEFAULTS:
        value = environ.get(key)
        if value is None or value == "":
            continue
        if key in INT_SETTINGS:
            try:
                value = int(value)
            except ValueError:
                raise ValueError(f"{key} must be an integer, got {value!r}")
        config[key] = value

    config["LOG_LEVEL"] = str(config["LOG_LEVEL"]).upper()
    return config
