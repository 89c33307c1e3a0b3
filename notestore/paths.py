import os
import sys

from .constants import DATA_DIR_NAME, DB_FILENAME


def _platform_data_home():
    if sys.platform.startswith("win"):
        return os.environ.get("APPDATA") or os.path.expanduser("~")
    if sys.platform == "darwin":
        return os.path.expanduser("~/Library/Application Support")
    return os.environ.get("XDG_DATA_HOME") or os.path.expanduser("~/.local/share")


def get_data_dir():
    # An explicit override wins so tests and portable installs can relocate the file.
    base = os.environ.get("NOTESTORE_DATA_DIR", "").strip()
    if base:
        data_dir = base
    else:
        data_dir = os.path.join(_platform_data_home(), DATA_DIR_NAME)
    os.makedirs(data_dir, exist_ok=True)
    return data_dir


def get_db_path():
    return os.path.join(get_data_dir(), DB_FILENAME)
