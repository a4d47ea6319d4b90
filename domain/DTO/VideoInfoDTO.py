# 응답 모델 (필드 이름은 기존 클라이언트 JSON 계약 그대로)
from pydantic import BaseModel


class VideoFormatOptionDTO(BaseModel):
    quality: str
    url: str
    mimeType: str
    hasAudio: bool
    fileSize: int | None = None
    container: str | None = None
    codecs: str | None = None


class AudioFormatOptionDTO(BaseModel):
    quality: str
    url: str
    mimeType: str
    hasAudio: bool = True
    fileSize: int | None = None
    container: str | None = None


class VideoFormatGroupDTO(BaseModel):
    mp4: list[VideoFormatOptionDTO] = []
    webm: list[VideoFormatOptionDTO] = []


class AudioFormatGroupDTO(BaseModel):
    # mp3 라고 부르지만 실제로는 mp4 컨테이너 오디오 (m4a)
    mp3: list[AudioFormatOptionDTO] = []
    webm: list[AudioFormatOptionDTO] = []


class FormatOptionsDTO(BaseModel):
    video: VideoFormatGroupDTO
    audio: AudioFormatGroupDTO


class ClassifiedResponseDTO(BaseModel):
    title: str | None = None
    image: str = ""
    description: str = ""
    lengthSeconds: str | None = None
    author: str = "Unknown"
    viewCount: str | None = None
    expiresInSeconds: str
    format_options: FormatOptionsDTO


class VideoDetailsDTO(BaseModel):
    title: str | None = None
    description: str | None = None
    lengthSeconds: str | None = None
    author: str | None = None
    thumbnail: str | None = None
    viewCount: str | None = None
    publishDate: str | None = None
    category: str | None = None
    keywords: list[str] = []
    isLive: bool = False
    isAgeRestricted: bool = False
    videoId: str | None = None


class SearchResultDTO(BaseModel):
    videoId: str
    title: str | None = None
    description: str | None = None
    duration: str = "0:00"
    views: int | None = None
    uploaded: str | None = None
    thumbnail: str | None = None
    author: str | None = None
    url: str


class SearchResponseDTO(BaseModel):
    query: str
    results: list[SearchResultDTO]
    total: int

