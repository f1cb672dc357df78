"""In-memory page model the view controller reads from and writes to.

Front ends render this state; they feed user actions back in through
``dispatch``. Handlers subscribe on the page itself, so rows that appear
after a refresh are covered without rebinding.
"""

import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

# Event names
SUBMIT_VIDEO = "submit-video"
LIKE = "like"
FAVORITE = "favorite"
DELETE = "delete"
DIALOG_HIDDEN = "dialog-hidden"

LEVELS = ("success", "danger", "warning", "info")

ICONS = {
    "success": "fa-check-circle",
    "danger": "fa-times-circle",
    "warning": "fa-star",
    "info": "fa-info-circle",
}

SUBMIT_LABEL = "Save"
LOADING_LABEL = "Saving..."

_toast_ids = itertools.count(1)

@dataclass
class VideoRow:
    id: str
    name: str
    link: str = ""
    likes: int = 0
    favorite: bool = False
    beating: bool = False  # like animation
    pulsing: bool = False  # favorite animation
    busy: bool = False

    @property
    def favorite_style(self) -> str:
        return "btn-warning" if self.favorite else "btn-outline-warning"

    @classmethod
    def from_json(cls, data: dict) -> "VideoRow":
        return cls(
            id=data["id"],
            name=data.get("nombre", ""),
            link=data.get("link", ""),
            likes=data.get("likes", 0),
            favorite=data.get("favorito", False),
        )

@dataclass
class Toast:
    message: str
    level: str
    visible: bool = True
    id: int = field(default_factory=lambda: next(_toast_ids))

    @property
    def icon(self) -> str:
        return ICONS[self.level]

@dataclass
class AddVideoDialog:
    name: str = ""
    link: str = ""
    error: Optional[str] = None
    error_visible: bool = False
    is_open: bool = False
    submitting: bool = False
    submit_label: str = SUBMIT_LABEL

class PageView:
    def __init__(self, confirm: Optional[Callable[[str], bool]] = None):
        self.rows: Dict[str, VideoRow] = {}
        self.toasts: List[Toast] = []
        self.dialog = AddVideoDialog()
        self._confirm = confirm
        self._handlers: Dict[str, List[Callable]] = {}

    # Events

    def on(self, event: str, handler: Callable):
        self._handlers.setdefault(event, []).append(handler)

    def off(self, event: str, handler: Callable):
        handlers = self._handlers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def handler_count(self, event: str) -> int:
        return len(self._handlers.get(event, []))

    def dispatch(self, event: str, **data):
        for handler in list(self._handlers.get(event, [])):
            handler(**data)

    # Rows

    def render_videos(self, videos: List[dict]):
        self.rows = {}
        for data in videos:
            row = VideoRow.from_json(data)
            self.rows[row.id] = row

    def row(self, video_id: str) -> Optional[VideoRow]:
        return self.rows.get(video_id)

    # Dialog

    def open_dialog(self):
        self.dialog.is_open = True

    def close_dialog(self):
        """Hides the add-video dialog and announces it, whatever closed it."""
        self.dialog.is_open = False
        self.dispatch(DIALOG_HIDDEN)

    def show_error(self, message: str):
        self.dialog.error = message
        self.dialog.error_visible = True

    def hide_error(self):
        self.dialog.error_visible = False

    # Toasts

    def add_toast(self, message: str, level: str) -> Toast:
        if level not in ICONS:
            raise ValueError(f"Unknown notification level: {level}")
        toast = Toast(message=message, level=level)
        self.toasts.append(toast)
        return toast

    def remove_toast(self, toast: Toast) -> bool:
        if toast in self.toasts:
            self.toasts.remove(toast)
            return True
        return False

    # Prompts

    def confirm(self, message: str) -> bool:
        if self._confirm is None:
            return False
        return bool(self._confirm(message))
