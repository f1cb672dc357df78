import logging
import os

from fastapi import FastAPI, Request, Form
from fastapi.responses import JSONResponse
from fastapi.templating import Jinja2Templates

from miplaylist.services import storage
from miplaylist.services.storage import InvalidVideoError

logger = logging.getLogger(__name__)

TITLE = "Mi Playlist Musical"

app = FastAPI(title=TITLE)

templates = Jinja2Templates(directory=os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates"))

NOT_FOUND = {"success": False, "message": "Video not found"}

@app.exception_handler(Exception)
async def handle_exception(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": f"Internal server error: {exc}"},
    )

@app.get("/")
def home(request: Request):
    logger.info("Rendering home page")
    storage.init_storage()
    return templates.TemplateResponse(request=request, name="index.html", context={
        "title": TITLE,
        "videos": storage.load_videos(),
        "stats": storage.get_stats(),
        "favorites_only": False,
    })

@app.get("/favoritos")
def favorites(request: Request):
    logger.info("Rendering favorites page")
    return templates.TemplateResponse(request=request, name="index.html", context={
        "title": "Favorite Videos",
        "videos": storage.get_favorites(),
        "stats": None,
        "favorites_only": True,
    })

@app.get("/api/videos")
def list_videos():
    return [v.to_json() for v in storage.load_videos()]

@app.get("/api/videos/top/{count}")
def top_videos(count: int):
    return [v.to_json() for v in storage.get_top_videos(count)]

@app.get("/api/videos/{video_id}")
def get_video(video_id: str):
    video = storage.get_video(video_id)
    if video is None:
        return JSONResponse(status_code=404, content=NOT_FOUND)
    return video.to_json()

@app.post("/api/videos")
def create_video(nombre: str = Form(""), link: str = Form("")):
    try:
        video = storage.add_video(nombre, link)
    except InvalidVideoError as e:
        logger.error(f"Error adding video: {e}")
        return JSONResponse(status_code=400, content={"success": False, "message": str(e)})

    return JSONResponse(status_code=201, content={
        "success": True,
        "message": "Video added successfully",
        "video": video.to_json(),
    })

@app.delete("/api/videos/{video_id}")
def delete_video(video_id: str):
    if not storage.delete_video(video_id):
        return JSONResponse(status_code=404, content=NOT_FOUND)
    return {"success": True, "message": "Video deleted successfully"}

@app.post("/api/videos/{video_id}/like")
def like_video(video_id: str):
    video = storage.add_like(video_id)
    if video is None:
        return JSONResponse(status_code=404, content=NOT_FOUND)
    return {"success": True, "likes": video.likes}

@app.post("/api/videos/{video_id}/favorito")
def toggle_favorite(video_id: str):
    video = storage.toggle_favorite(video_id)
    if video is None:
        return JSONResponse(status_code=404, content=NOT_FOUND)
    return {"success": True, "favorito": video.favorite}

@app.get("/api/stats")
def stats():
    return storage.get_stats().model_dump(by_alias=True)
