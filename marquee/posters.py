import re
from typing import Callable, Optional, Sequence

# (description, url) -> poster url or None
PosterStrategy = Callable[[str, str], Optional[str]]

POSTER_MARKER_RE = re.compile(r"Poster\s*:\s*(https?://\S+)", re.IGNORECASE)
IMAGE_LINK_RE = re.compile(r"https?://\S+\.(?:jpg|jpeg|png|webp)", re.IGNORECASE)
HTTP_URL_RE = re.compile(r"^https?://")


def poster_marker(description: str, url: str) -> Optional[str]:
    """`Poster: <url>` anywhere in the description."""
    m = POSTER_MARKER_RE.search(description)
    return m.group(1).strip() if m else None


def image_link(description: str, url: str) -> Optional[str]:
    """First http(s) link in the description ending in an image extension."""
    m = IMAGE_LINK_RE.search(description)
    return m.group(0) if m else None


def event_url(description: str, url: str) -> Optional[str]:
    return url if url and HTTP_URL_RE.match(url) else None


POSTER_STRATEGIES: Sequence[PosterStrategy] = (
    poster_marker,
    image_link,
    event_url,
)


def extract_poster(description: str, url: str = "",
                   strategies: Sequence[PosterStrategy] = POSTER_STRATEGIES) -> Optional[str]:
    """
    Run the strategies in priority order and return the first hit.
    None means the renderer should draw its placeholder.
    """
    description = description or ""
    url = url or ""
    for strategy in strategies:
        found = strategy(description, url)
        if found:
            return found
    return None
