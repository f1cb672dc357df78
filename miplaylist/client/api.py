"""Async client for the playlist REST API."""

import logging
from typing import List, Optional

import httpx

from ..config import settings

logger = logging.getLogger(__name__)

class ApiError(Exception):
    """A request failed at transport level or came back with a non-2xx status.

    ``message`` is the server's own ``message`` field when the response carried one.
    """

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message or "Request failed")
        self.message = message
        self.status_code = status_code

class PlaylistClient:
    def __init__(self, base_url: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url or settings.API_URL
        self._http = httpx.AsyncClient(base_url=self.base_url, transport=transport)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        await self._http.aclose()

    async def _request(self, method: str, url: str, **kwargs):
        try:
            resp = await self._http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise ApiError(status_code=None) from e

        if resp.is_error:
            raise ApiError(_server_message(resp), status_code=resp.status_code)

        try:
            return resp.json()
        except ValueError as e:
            raise ApiError(status_code=resp.status_code) from e

    async def create_video(self, name: str, link: str) -> dict:
        return await self._request("POST", "/api/videos", data={"nombre": name, "link": link})

    async def add_like(self, video_id: str) -> dict:
        return await self._request("POST", f"/api/videos/{video_id}/like")

    async def toggle_favorite(self, video_id: str) -> dict:
        return await self._request("POST", f"/api/videos/{video_id}/favorito")

    async def delete_video(self, video_id: str) -> dict:
        return await self._request("DELETE", f"/api/videos/{video_id}")

    async def list_videos(self) -> List[dict]:
        return await self._request("GET", "/api/videos")

    async def get_stats(self) -> dict:
        return await self._request("GET", "/api/stats")

def _server_message(resp: httpx.Response) -> Optional[str]:
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("message")
    return None
