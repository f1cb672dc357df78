"""Wires page events to API calls and API responses back to the page."""

import asyncio
import logging
from typing import Optional

from ..config import settings
from ..services.utils import is_valid_youtube_url
from . import view as events
from .api import ApiError, PlaylistClient
from .scheduler import Scheduler
from .view import PageView, LOADING_LABEL

logger = logging.getLogger(__name__)

class ViewController:
    def __init__(self, view: PageView, client: PlaylistClient, scheduler: Optional[Scheduler] = None):
        self.view = view
        self.client = client
        self.scheduler = scheduler or Scheduler()
        self._bound = False
        self._tasks = set()
        self._in_flight = set()
        self._error_timer = None
        self._bindings = [
            (events.SUBMIT_VIDEO, self.on_submit_video),
            (events.LIKE, self.on_like),
            (events.FAVORITE, self.on_favorite),
            (events.DELETE, self.on_delete),
            (events.DIALOG_HIDDEN, self.clear_form),
        ]

    # Lifecycle

    def bind(self):
        if self._bound:
            logger.debug("View controller already bound")
            return
        logger.info("Mi Playlist Musical - client loaded")
        for event, handler in self._bindings:
            self.view.on(event, handler)
        self._bound = True

    def unbind(self):
        if not self._bound:
            return
        for event, handler in self._bindings:
            self.view.off(event, handler)
        for task in self._tasks:
            task.cancel()
        for _, video_id in self._in_flight:
            self._set_busy(video_id, False)
        self._in_flight.clear()
        self.scheduler.cancel_all()
        self._error_timer = None
        self._bound = False

    @property
    def bound(self) -> bool:
        return self._bound

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task):
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"View task failed: {task.exception()!r}", exc_info=task.exception())

    async def drain(self):
        """Waits until every request started so far, and any it started, has finished."""
        while True:
            pending = [t for t in self._tasks if not t.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    def _claim(self, action: str, video_id: str) -> bool:
        key = (action, video_id)
        if key in self._in_flight:
            logger.debug(f"Ignoring repeated {action} on {video_id} while in flight")
            return False
        self._in_flight.add(key)
        self._set_busy(video_id, True)
        return True

    def _release(self, action: str, video_id: str):
        self._in_flight.discard((action, video_id))
        if not any(vid == video_id for _, vid in self._in_flight):
            self._set_busy(video_id, False)

    def _set_busy(self, video_id: str, busy: bool):
        row = self.view.row(video_id)
        if row is not None:
            row.busy = busy

    # Event handlers

    def on_submit_video(self):
        if self._claim(events.SUBMIT_VIDEO, ""):
            self._spawn(self._guarded(events.SUBMIT_VIDEO, "", self.add_video))

    def on_like(self, video_id):
        if self._claim(events.LIKE, video_id):
            self._spawn(self._guarded(events.LIKE, video_id, self.add_like, video_id))

    def on_favorite(self, video_id):
        if self._claim(events.FAVORITE, video_id):
            self._spawn(self._guarded(events.FAVORITE, video_id, self.toggle_favorite, video_id))

    def on_delete(self, video_id, video_name):
        self.confirm_delete(video_id, video_name)

    async def _guarded(self, action, video_id, command, *args):
        try:
            await command(*args)
        finally:
            self._release(action, video_id)

    # Commands

    async def add_video(self):
        dialog = self.view.dialog
        name = dialog.name.strip()
        link = dialog.link.strip()

        if not name or not link:
            self.show_error("Please fill in all fields")
            return

        if not is_valid_youtube_url(link):
            self.show_error("Please enter a valid YouTube URL")
            return

        original_label = dialog.submit_label
        dialog.submitting = True
        dialog.submit_label = LOADING_LABEL
        try:
            response = await self.client.create_video(name, link)
            if response.get("success"):
                self.view.close_dialog()
                self.clear_form()
                self.notify("Video added successfully", "success")
                self.schedule_refresh()
            else:
                self.show_error(response.get("message") or "Error adding the video")
        except ApiError as e:
            logger.warning(f"Create video failed: {e}")
            self.show_error(e.message or "Error adding the video")
        finally:
            dialog.submitting = False
            dialog.submit_label = original_label

    async def add_like(self, video_id: str):
        try:
            response = await self.client.add_like(video_id)
        except ApiError as e:
            logger.warning(f"Like on {video_id} failed: {e}")
            self.notify("Error adding like", "danger")
            return

        likes = response.get("likes")
        if not response.get("success") or likes is None:
            self.notify("Error adding like", "danger")
            return

        row = self.view.row(video_id)
        if row is not None:
            row.likes = likes
            row.beating = True
            self.scheduler.call_later(settings.ANIMATION_DELAY, setattr, row, "beating", False)
        self.notify("Like added!", "success")

    async def toggle_favorite(self, video_id: str):
        try:
            response = await self.client.toggle_favorite(video_id)
        except ApiError as e:
            logger.warning(f"Favorite toggle on {video_id} failed: {e}")
            self.notify("Error updating favorite", "danger")
            return

        if not response.get("success") or "favorito" not in response:
            self.notify("Error updating favorite", "danger")
            return

        favorite = bool(response["favorito"])
        row = self.view.row(video_id)
        if row is not None:
            row.favorite = favorite
            row.pulsing = True
            self.scheduler.call_later(settings.ANIMATION_DELAY, setattr, row, "pulsing", False)

        if favorite:
            self.notify("Added to favorites!", "warning")
        else:
            self.notify("Removed from favorites", "info")

    def confirm_delete(self, video_id: str, video_name: str) -> bool:
        if not self.view.confirm(f'Are you sure you want to delete "{video_name}"?'):
            return False
        if self._claim(events.DELETE, video_id):
            self._spawn(self._guarded(events.DELETE, video_id, self.delete_video, video_id))
        return True

    async def delete_video(self, video_id: str):
        try:
            response = await self.client.delete_video(video_id)
        except ApiError as e:
            logger.warning(f"Delete of {video_id} failed: {e}")
            self.notify("Error deleting the video", "danger")
            return

        if not response.get("success"):
            self.notify("Error deleting the video", "danger")
            return

        self.notify("Video deleted successfully", "success")
        self.schedule_refresh()

    async def refresh(self):
        """Re-fetches the playlist and re-renders the rows."""
        try:
            videos = await self.client.list_videos()
        except ApiError as e:
            logger.warning(f"Refresh failed: {e}")
            self.notify("Could not refresh the playlist", "danger")
            return
        self.view.render_videos(videos)

    def schedule_refresh(self):
        return self.scheduler.call_later(settings.REFRESH_DELAY, self._refresh_now)

    def _refresh_now(self):
        self._spawn(self.refresh())

    # Feedback

    def show_error(self, message: str):
        self.view.show_error(message)
        if self._error_timer is not None:
            self._error_timer.cancel()
        self._error_timer = self.scheduler.call_later(settings.ERROR_DELAY, self._hide_error)

    def _hide_error(self):
        self._error_timer = None
        self.view.hide_error()

    def clear_form(self):
        dialog = self.view.dialog
        dialog.name = ""
        dialog.link = ""
        self.view.hide_error()

    def notify(self, message: str, level: str):
        toast = self.view.add_toast(message, level)
        self.scheduler.call_later(settings.TOAST_DELAY, self._expire_toast, toast)
        return toast

    def _expire_toast(self, toast):
        toast.visible = False
        self.view.remove_toast(toast)
