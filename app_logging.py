"""
Shared application logger.

Every module logs through ``app_logger``. Log files live under
CONFIG_DIR/logs so they sit next to config.ini.
"""
import logging
import os

CONFIG_DIR = os.environ.get('CONFIG_DIR', os.getcwd())
LOG_DIR = os.path.join(CONFIG_DIR, "logs")
os.makedirs(LOG_DIR, exist_ok=True)
APP_LOG = os.path.join(LOG_DIR, "app.log")

app_logger = logging.getLogger("app_logger")
app_logger.setLevel(logging.INFO)
app_logger.propagate = False

# Only add handlers once (module may be re-imported by entry points)
if not app_logger.handlers:
    file_handler = logging.FileHandler(APP_LOG)
    file_handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
    app_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    app_logger.addHandler(console_handler)


def set_debug(enabled):
    """Switch app_logger between DEBUG and INFO."""
    app_logger.setLevel(logging.DEBUG if enabled else logging.INFO)
