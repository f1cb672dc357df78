import re
from typing import Optional

YOUTUBE_URL_RE = re.compile(r'^(https?://)?(www\.)?(youtube\.com|youtu\.be)/.+')

EMBED_BASE = "https://www.youtube.com/embed/"

def is_valid_youtube_url(url: str) -> bool:
    """Client-side check: optional scheme, optional www., youtube.com or youtu.be, then a path."""
    if not url:
        return False
    return YOUTUBE_URL_RE.match(url) is not None

def mentions_youtube(url: str) -> bool:
    """Looser check applied by the server before storing a link."""
    return "youtube.com" in url or "youtu.be" in url

def extract_video_id(url: str) -> Optional[str]:
    """Pulls the video id out of watch?v= and youtu.be/ links."""
    if "watch?v=" in url:
        start = url.index("watch?v=") + len("watch?v=")
        return url[start:].split("&", 1)[0]

    if "youtu.be/" in url:
        start = url.index("youtu.be/") + len("youtu.be/")
        return url[start:].split("?", 1)[0]

    return None

def to_embed_url(url: str) -> str:
    """Converts a regular YouTube link to its /embed/ form.

    https://www.youtube.com/watch?v=dQw4w9WgXcQ -> https://www.youtube.com/embed/dQw4w9WgXcQ
    Links that are already embedded, or carry no recognisable id, are returned as is.
    """
    if not url or "/embed/" in url:
        return url

    video_id = extract_video_id(url)
    if video_id:
        return EMBED_BASE + video_id
    return url
