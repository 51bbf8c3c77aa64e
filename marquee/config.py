import re

import yaml
from loguru import logger

import marquee.settings as settings
from marquee.utils import css_color_to_hex

DEFAULT_CONFIG = {
    "title": "",
    "categories": [
        {"name": "wow", "label": "WOW Wed 6p", "pattern": "wednesday|wow", "color": "#f96"},
        {"name": "fri", "label": "Fri 8p",     "pattern": "friday",        "color": "#e5c"},
        {"name": "sat", "label": "Sat 8p",     "pattern": "saturday",      "color": "#6cd"},
    ],
}


def load_config(path=None) -> dict:
    """Load calendar config and normalize category colors. Missing or broken files fall back to defaults."""
    path = path or settings.CONFIG_PATH
    config = None
    try:
        with open(path, 'r', encoding='utf-8') as f:
            logger.debug("Loading configuration from {}", path)
            config = yaml.safe_load(f)
    except FileNotFoundError:
        logger.info("No config at {}, using defaults.", path)
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to read config {}: {}. Using defaults.", path, e)

    if not isinstance(config, dict):
        config = {}
    merged = {**DEFAULT_CONFIG, **config}
    merged["categories"] = [dict(c) for c in merged.get("categories") or []]
    for cat in merged["categories"]:
        cat["color"] = css_color_to_hex(str(cat.get("color", "#CCCCCC")))
        cat.setdefault("label", cat.get("name", ""))
    return merged


def classify(title: str, categories: list[dict]) -> str:
    """First category whose pattern matches the title, else 'oth'."""
    for cat in categories:
        pattern = cat.get("pattern")
        if pattern and re.search(pattern, title, re.IGNORECASE):
            return cat["name"]
    return "oth"
