import asyncio
import logging
import re
from urllib.parse import parse_qs, urlparse

from fastapi import Request
from googleapiclient.discovery import build
from googleapiclient.http import build_http
from yt_dlp import YoutubeDL
from yt_dlp.utils import DownloadError, ExtractorError

from common.config.config import AppConfig
from common.exceptionHandler.Exceptions import (
    AgeRestrictedError,
    ResolverError,
    SearchError,
    VideoUnavailableError,
)
from domain.DTO.DTO import StreamFormatDTO, ThumbnailDTO, VideoInfoDTO, VideoMetadataDTO
from domain.DTO.VideoInfoDTO import SearchResultDTO

log = logging.getLogger(__name__)

# yt-dlp 에러 메시지 -> 예외 타입 (문자열 비교는 이 모듈 안에서만)
UNAVAILABLE_MARKERS = ("Video unavailable", "Private video", "This video has been removed")
AGE_RESTRICTED_MARKERS = ("Sign in to confirm your age", "age-restricted")

SEARCH_PAGE_SIZE = 20
SEARCH_MAX_RESULTS = 50  # search.list maxResults 상한

# 파일로 바로 받을 수 있는 프로토콜 (hls / dash manifest 제외)
DOWNLOADABLE_PROTOCOLS = ("http", "https")

VALID_QUERY_DOMAINS = {
    "youtube.com",
    "www.youtube.com",
    "m.youtube.com",
    "music.youtube.com",
    "gaming.youtube.com",
}
VALID_PATH_PATTERN = re.compile(r"^https?://(?:youtu\.be/|(?:www\.|m\.)?youtube\.com/(?:embed|v|shorts|live)/)")
VIDEO_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{11}$")


class YoutubeService:

    def __init__(self, config: AppConfig):
        self.config = config
        self._youtube = None  # 검색 api 클라이언트 (첫 검색 때 생성)

    # yt-dlp 옵션 (다운로드 없이 정보만)
    def ydl_options(self) -> dict:
        return {
            "quiet": True,
            "no_warnings": True,
            "skip_download": True,
            "noplaylist": True,
            "http_headers": {"User-Agent": self.config.user_agent},
        }

    @property
    def youtube(self):
        if self._youtube is None:
            if not self.config.youtube_api_key:
                raise SearchError("YOUTUBE_API_KEY is not configured")
            self._youtube = build("youtube", "v3", developerKey=self.config.youtube_api_key, cache_discovery=False)
        return self._youtube

    # 유튜브 영상 url 검사 (watch / youtu.be / embed / shorts / live)
    @staticmethod
    def validate_url(url: str | None) -> bool:
        if not url:
            return False
        url = url.strip()
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            return False

        video_id = parse_qs(parsed.query).get("v", [None])[0]
        if VALID_PATH_PATTERN.match(url):
            # youtu.be/ID, /embed/ID ...
            video_id = video_id or parsed.path.rstrip("/").split("/")[-1]
        elif parsed.netloc.lower() not in VALID_QUERY_DOMAINS:
            return False

        return bool(video_id) and bool(VIDEO_ID_PATTERN.match(video_id[:11]))

    # 영상 정보 + 포맷 목록 조회
    async def get_info(self, url: str) -> VideoInfoDTO:
        info = await asyncio.to_thread(self._extract_info, url)
        return self.parse_info(info)

    def _extract_info(self, url: str) -> dict:
        try:
            with YoutubeDL(self.ydl_options()) as ydl:
                return ydl.extract_info(url, download=False)
        except (DownloadError, ExtractorError) as e:
            raise self.translate_error(e) from e
        except Exception as e:
            raise ResolverError(str(e), original_error=e) from e

    @staticmethod
    def translate_error(error: Exception) -> ResolverError:
        message = str(error)
        if any(marker in message for marker in UNAVAILABLE_MARKERS):
            return VideoUnavailableError(message, original_error=error)
        if any(marker in message for marker in AGE_RESTRICTED_MARKERS):
            return AgeRestrictedError(message, original_error=error)
        return ResolverError(message, original_error=error)

    @classmethod
    def parse_info(cls, info: dict) -> VideoInfoDTO:
        return VideoInfoDTO(
            details=cls.parse_details(info),
            formats=[cls.parse_format(fmt) for fmt in info.get("formats") or [] if cls.is_downloadable(fmt)],
        )

    @staticmethod
    def is_downloadable(fmt: dict) -> bool:
        return bool(fmt.get("url")) and fmt.get("protocol", "https") in DOWNLOADABLE_PROTOCOLS

    @staticmethod
    def parse_details(info: dict) -> VideoMetadataDTO:
        upload_date = info.get("upload_date")
        categories = info.get("categories") or []
        duration = info.get("duration")

        return VideoMetadataDTO(
            video_id=info.get("id"),
            title=info.get("title"),
            description=info.get("description"),
            author_name=info.get("uploader") or info.get("channel"),
            length_seconds=int(duration) if duration is not None else None,
            view_count=info.get("view_count"),
            thumbnails=[
                ThumbnailDTO(url=thumb["url"], width=thumb.get("width"), height=thumb.get("height"))
                for thumb in info.get("thumbnails") or []
                if thumb.get("url")
            ],
            # 20240131 -> 2024-01-31
            publish_date=f"{upload_date[:4]}-{upload_date[4:6]}-{upload_date[6:8]}" if upload_date else None,
            category=categories[0] if categories else None,
            keywords=info.get("tags") or [],
            is_live_content=info.get("live_status") not in (None, "not_live"),
            age_restricted=(info.get("age_limit") or 0) >= 18,
        )

    @staticmethod
    def parse_format(fmt: dict) -> StreamFormatDTO:
        vcodec = fmt.get("vcodec")
        acodec = fmt.get("acodec")
        has_video = vcodec not in (None, "none")
        has_audio = acodec not in (None, "none")

        ext = fmt.get("ext")
        container = "mp4" if ext == "m4a" else ext
        codecs = ", ".join(codec for codec in (vcodec, acodec) if codec not in (None, "none"))

        kind = "audio" if has_audio and not has_video else "video"
        mime_type = f"{kind}/{container}" if container else ""
        if mime_type and codecs:
            mime_type += f'; codecs="{codecs}"'

        note = fmt.get("format_note")
        height = fmt.get("height")
        if note and re.search(r"\d+p", note):
            quality_label = note
        elif height:
            quality_label = f"{height}p"
        else:
            quality_label = None

        size = fmt.get("filesize") or fmt.get("filesize_approx")

        return StreamFormatDTO(
            url=fmt["url"],
            mime_type=mime_type,
            quality_label=quality_label if has_video else None,
            audio_quality=note if has_audio and not has_video else None,
            has_video=has_video,
            has_audio=has_audio,
            content_length=int(size) if size else None,
            container=container,
            codecs=codecs or None,
        )

    # 시간 정규화 PT1H2M3S -> 1:02:03
    @staticmethod
    def format_duration(duration: str | None) -> str:
        match = re.match(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?", duration or "")
        if not match:
            return "0:00"

        hours = int(match.group(1)) if match.group(1) else 0
        minutes = int(match.group(2)) if match.group(2) else 0
        seconds = int(match.group(3)) if match.group(3) else 0

        if hours:
            return f"{hours}:{minutes:02d}:{seconds:02d}"
        return f"{minutes}:{seconds:02d}"

    @staticmethod
    def format_published_at(published_at: str | None) -> str | None:
        if not published_at:
            return None
        return published_at.replace("T", " ").replace("Z", "")

    # 쿼리로 유튜브 검색
    async def search(self, query: str, max_results: int = SEARCH_PAGE_SIZE) -> list[SearchResultDTO]:
        return await asyncio.to_thread(self._search, query, max_results)

    def _search(self, query: str, max_results: int) -> list[SearchResultDTO]:
        # Resource 는 공유, Http 는 스레드마다 따로 (httplib2 는 thread-safe 아님)
        youtube = self.youtube
        try:
            response = youtube.search().list(
                q=query,
                part="id",
                maxResults=max_results,
                type="video"
            ).execute(http=build_http())
            video_ids = [item["id"]["videoId"] for item in response.get("items", [])]
            if not video_ids:
                return []

            details = youtube.videos().list(
                part="snippet,contentDetails,statistics",
                id=",".join(video_ids)
            ).execute(http=build_http())
        except Exception as e:
            log.error(f"YouTube search failed: {e}")
            raise SearchError(str(e), original_error=e) from e

        items = {item.get("id"): item for item in details.get("items", [])}
        # 검색 결과 순서 유지
        return [self.parse_search_item(items[video_id]) for video_id in video_ids if video_id in items]

    @classmethod
    def parse_search_item(cls, item: dict) -> SearchResultDTO:
        snippet = item.get("snippet", {})
        content = item.get("contentDetails", {})
        statistics = item.get("statistics", {})
        video_id = item.get("id", "")
        views = statistics.get("viewCount")

        return SearchResultDTO(
            videoId=video_id,
            title=snippet.get("title"),
            description=snippet.get("description"),
            duration=cls.format_duration(content.get("duration")),
            views=int(views) if views is not None else None,
            uploaded=cls.format_published_at(snippet.get("publishedAt")),
            thumbnail=snippet.get("thumbnails", {}).get("high", {}).get("url"),
            author=snippet.get("channelTitle"),
            url=f"https://www.youtube.com/watch?v={video_id}",
        )


def get_youtube_service(request: Request) -> YoutubeService:
    return request.app.state.youtube
