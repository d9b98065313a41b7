"""
Searchable text extraction for speech videos.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Union

TEXT_FIELDS = ("title", "topic", "transcript", "script")


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


@dataclass(frozen=True)
class VideoContent:
    """Read-only view over a stored video, carrying only what matching needs."""
    id: str
    title: str = ""
    topic: str = ""
    transcript: str = ""
    script: str = ""
    views: int = 0
    uploader_id: str = ""
    thumbnail: Optional[str] = None
    uploader_role: Optional[str] = None
    is_public: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VideoContent":
        """Build from a loose mapping (snake_case or the web client's camelCase)."""
        uploader = data.get("user") or {}
        return cls(
            id=_text(_pick(data, "id", "video_id", default="")),
            title=_text(data.get("title")),
            topic=_text(data.get("topic")),
            transcript=_text(data.get("transcript")),
            script=_text(data.get("script")),
            views=int(_pick(data, "views", default=0) or 0),
            uploader_id=_text(_pick(data, "uploader_id", "userId", "user_id", default=uploader.get("id", ""))),
            thumbnail=data.get("thumbnail"),
            uploader_role=_pick(
                data, "uploader_role", "accountType", "account_type",
                default=uploader.get("accountType") or uploader.get("account_type"),
            ),
            is_public=bool(_pick(data, "is_public", "isPublic", default=True)),
        )

    def preview(self) -> Dict[str, Any]:
        """Card payload shown in match results."""
        return {
            "id": self.id,
            "title": self.title,
            "topic": self.topic,
            "views": self.views,
            "thumbnail": self.thumbnail,
        }


def extract(video: Union[VideoContent, Mapping[str, Any]]) -> str:
    """Lowercased "title topic transcript script" blob for a video."""
    if isinstance(video, Mapping):
        parts = [_text(video.get(name)) for name in TEXT_FIELDS]
    else:
        parts = [_text(getattr(video, name, None)) for name in TEXT_FIELDS]
    return " ".join(parts).lower()


def aggregate_text(videos: Iterable[Union[VideoContent, Mapping[str, Any]]]) -> str:
    """Combined blob across all of a speaker's videos."""
    return " ".join(extract(video) for video in videos)
