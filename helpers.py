import os

from config import config

COMICS_JSON = "comics.json"
IMG_DIRNAME = "img"


def get_cache_dir():
    """
    Resolve CACHE_DIR from config.ini. Relative values are taken from the
    current working directory.
    """
    cache_dir = config.get("SETTINGS", "CACHE_DIR", fallback="cache").strip() or "cache"
    return os.path.abspath(cache_dir)


def get_img_dir(cache_dir=None):
    return os.path.join(cache_dir or get_cache_dir(), IMG_DIRNAME)


def get_comics_json_path(cache_dir=None):
    return os.path.join(cache_dir or get_cache_dir(), COMICS_JSON)


def img_path(num, ext, cache_dir=None):
    """Path of the image artifact for comic ``num``, e.g. cache/img/353.png."""
    return os.path.join(get_img_dir(cache_dir), f"{num}.{ext}")
