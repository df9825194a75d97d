import configparser
import os
from app_logging import app_logger

# CONFIG_DIR from the environment, otherwise the current directory
CONFIG_DIR = os.environ.get('CONFIG_DIR', os.getcwd())
# Ensure config directory exists
os.makedirs(CONFIG_DIR, exist_ok=True)
CONFIG_FILE = os.path.join(CONFIG_DIR, "config.ini")

# Use RawConfigParser to allow special characters like % in values (no interpolation)
config = configparser.RawConfigParser()
config.optionxform = str  # Preserve case sensitivity

DEFAULT_SETTINGS = {
    "CACHE_DIR": "cache",
    "BASE_URL": "https://xkcd.com",
    "EXPLAIN_URL": "https://explainxkcd.com",
    "REQUEST_TIMEOUT": "",
    "USER_AGENT": "xkcd-rank",
    "ENABLE_DEBUG_LOGGING": "False",
}


def write_config():
    """Writes the current in-memory config object to config.ini."""
    config.optionxform = str  # Preserve case sensitivity
    with open(CONFIG_FILE, "w") as configfile:
        config.write(configfile)


def load_config():
    """
    Loads or (if missing) creates the config file, ensuring
    that the [SETTINGS] section exists.
    """
    app_logger.debug(f"Config file location: {CONFIG_FILE}")

    if not os.path.exists(CONFIG_FILE):
        # Create a default config.ini if none exists
        config["SETTINGS"] = dict(DEFAULT_SETTINGS)
        write_config()
        return

    config.read(CONFIG_FILE)

    # Ensure the SETTINGS section exists
    if "SETTINGS" not in config:
        config["SETTINGS"] = {}

    # Migrate/add any missing keys with defaults (preserves existing values)
    missing_keys = []
    for key, default_value in DEFAULT_SETTINGS.items():
        if key not in config["SETTINGS"]:
            config["SETTINGS"][key] = default_value
            missing_keys.append(key)

    if missing_keys:
        app_logger.info(f"Migrated {len(missing_keys)} new config keys: {', '.join(missing_keys)}")
        write_config()
    else:
        app_logger.debug("Config file loaded successfully (no migration needed)")


def get_request_timeout():
    """
    Timeout in seconds for remote calls, or None when REQUEST_TIMEOUT is empty.

    None leaves requests without a timeout, so a stalled server stalls the caller.
    """
    raw = config.get("SETTINGS", "REQUEST_TIMEOUT", fallback="").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        app_logger.warning(f"Ignoring invalid REQUEST_TIMEOUT value: {raw!r}")
        return None


def get_debug_logging():
    return config.getboolean("SETTINGS", "ENABLE_DEBUG_LOGGING", fallback=False)


# Initial config load
load_config()
