import json
import os
import logging
import threading
from typing import List, Optional

from pydantic import ValidationError

from ..config import settings
from ..models import Video, PlaylistStats
from .utils import mentions_youtube

logger = logging.getLogger(__name__)

MAX_TOP_VIDEOS = 100

# Serializes read-modify-write cycles on the data file
_lock = threading.RLock()

class StorageError(Exception):
    """Raised when the data file cannot be written."""

class InvalidVideoError(ValueError):
    """Raised when a new entry fails validation. The message is shown to the user."""

def _data_file() -> str:
    return settings.DATA_FILE

def init_storage():
    """Creates the data file holding an empty list if it does not exist yet."""
    if not os.path.exists(_data_file()):
        save_videos([])

def load_videos() -> List[Video]:
    """Loads every entry, in insertion order."""
    path = _data_file()
    if not os.path.exists(path):
        return []
    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read().strip()
            if not content:
                return []
            data = json.loads(content)
        return [Video.model_validate(item) for item in data]
    except (json.JSONDecodeError, ValidationError, TypeError):
        logger.warning(f"Corrupted data file found at {path}. Returning empty playlist.")
        return []

def save_videos(videos: List[Video]):
    path = _data_file()
    try:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump([v.to_json() for v in videos], f, indent=2, ensure_ascii=False)
    except OSError as e:
        logger.error(f"Error saving videos: {e}")
        raise StorageError(f"Could not save videos: {e}") from e

def get_video(video_id: str) -> Optional[Video]:
    logger.info(f"Looking up video {video_id}")
    for video in load_videos():
        if video.id == video_id:
            return video
    return None

def _validate(name: str, link: str):
    if name is None or not name.strip():
        raise InvalidVideoError("The video name cannot be empty")
    if link is None or not link.strip():
        raise InvalidVideoError("The video link cannot be empty")
    if not mentions_youtube(link):
        raise InvalidVideoError("The link is not a valid YouTube URL")

def add_video(name: str, link: str) -> Video:
    """Validates and stores a new entry."""
    _validate(name, link)
    video = Video.create(name.strip(), link.strip())
    with _lock:
        videos = load_videos()
        videos.append(video)
        save_videos(videos)
    logger.info(f"Video added: {video.name} - {video.id}")
    return video

def delete_video(video_id: str) -> bool:
    with _lock:
        videos = load_videos()
        remaining = [v for v in videos if v.id != video_id]
        if len(remaining) == len(videos):
            logger.warning(f"Video not found for deletion: {video_id}")
            return False
        save_videos(remaining)
    logger.info(f"Video deleted: {video_id}")
    return True

def _update(video_id: str, change) -> Optional[Video]:
    with _lock:
        videos = load_videos()
        for video in videos:
            if video.id == video_id:
                change(video)
                save_videos(videos)
                return video
    return None

def add_like(video_id: str) -> Optional[Video]:
    def like(video):
        video.likes += 1

    video = _update(video_id, like)
    if video is None:
        logger.warning(f"Could not add like, video not found: {video_id}")
    else:
        logger.info(f"Like added to {video_id}. Total likes: {video.likes}")
    return video

def toggle_favorite(video_id: str) -> Optional[Video]:
    def flip(video):
        video.favorite = not video.favorite

    video = _update(video_id, flip)
    if video is None:
        logger.warning(f"Could not toggle favorite, video not found: {video_id}")
    else:
        logger.info(f"Favorite state of {video_id} is now {video.favorite}")
    return video

def get_favorites() -> List[Video]:
    return [v for v in load_videos() if v.favorite]

def get_top_videos(count: int) -> List[Video]:
    """Most liked entries first. The count is clamped to 1..100."""
    count = max(1, min(count, MAX_TOP_VIDEOS))
    logger.info(f"Fetching top {count} videos by likes")
    return sorted(load_videos(), key=lambda v: v.likes, reverse=True)[:count]

def get_stats() -> PlaylistStats:
    videos = load_videos()
    return PlaylistStats(
        total_videos=len(videos),
        total_favorites=sum(1 for v in videos if v.favorite),
        total_likes=sum(v.likes for v in videos),
    )
