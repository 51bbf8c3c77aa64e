import yaml
from loguru import logger

import marquee.settings as settings

META_KEYS = ("_last_anchor", "events_hash")


def load_meta(path=None) -> dict:
    """
    Load metadata from META_FILE. Return {} if missing or invalid.
    """
    path = path or settings.META_FILE
    if path.exists() and path.is_file():
        try:
            data = yaml.safe_load(path.read_text())
            if isinstance(data, dict):
                return {k: v for k, v in data.items() if k in META_KEYS}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Failed to parse meta file: {}, using empty metadata.", e)
    return {}


def save_meta(meta: dict, path=None) -> None:
    """
    Save metadata to META_FILE, only writing expected keys.
    """
    path = path or settings.META_FILE
    to_write = {k: meta[k] for k in META_KEYS if k in meta}
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(to_write))
    except OSError as e:
        logger.warning("Failed to write meta file: {}", e)
