# 영상 조회 라이브러리에서 받아온 원본 데이터 모델 (읽기 전용)
from pydantic import BaseModel


class StreamFormatDTO(BaseModel):
    url: str
    mime_type: str = ""
    quality_label: str | None = None  # 예: 1080p, 720p60
    audio_quality: str | None = None
    has_video: bool = False
    has_audio: bool = False
    content_length: int | None = None  # bytes
    container: str | None = None  # mp4 / webm
    codecs: str | None = None


class ThumbnailDTO(BaseModel):
    url: str
    width: int | None = None
    height: int | None = None


class VideoMetadataDTO(BaseModel):
    video_id: str | None = None
    title: str | None = None
    description: str | None = None
    author_name: str | None = None
    length_seconds: int | None = None
    view_count: int | None = None
    thumbnails: list[ThumbnailDTO] = []  # 마지막이 가장 큰 해상도
    publish_date: str | None = None
    category: str | None = None
    keywords: list[str] = []
    is_live_content: bool = False
    age_restricted: bool = False


class VideoInfoDTO(BaseModel):
    details: VideoMetadataDTO
    formats: list[StreamFormatDTO] = []
