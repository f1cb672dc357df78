import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .services.utils import to_embed_url

class Video(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = Field(alias="nombre")
    link: str
    likes: int = 0
    favorite: bool = Field(default=False, alias="favorito")
    added_at: datetime = Field(default_factory=datetime.now, alias="fechaAgregado")

    @classmethod
    def create(cls, name: str, link: str) -> "Video":
        """New entry with the link stored in embed form."""
        return cls(name=name, link=to_embed_url(link))

    @property
    def embed_id(self) -> Optional[str]:
        if self.link and "/embed/" in self.link:
            return self.link.rsplit("/", 1)[-1]
        return None

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")

class PlaylistStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_videos: int = Field(alias="totalVideos")
    total_favorites: int = Field(alias="totalFavoritos")
    total_likes: int = Field(alias="totalLikes")
