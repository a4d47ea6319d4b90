"""
Shared pytest fixtures for the API test suite.

The YouTube service is a real YoutubeService whose network-facing methods
(get_info / search) are replaced by AsyncMocks, so URL validation runs for real
while no request ever leaves the process.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from hypothesis import HealthCheck, settings

from common.config.config import AppConfig
from domain.DTO.DTO import StreamFormatDTO, ThumbnailDTO, VideoInfoDTO, VideoMetadataDTO
from domain.DTO.VideoInfoDTO import SearchResultDTO
from domain.service.Youtube import YoutubeService
from main import create_app

settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile("default")


VALID_URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


def make_format(**overrides) -> StreamFormatDTO:
    values = {
        "url": "https://rr1.googlevideo.com/videoplayback?itag=18",
        "mime_type": 'video/mp4; codecs="avc1.42001E, mp4a.40.2"',
        "quality_label": "360p",
        "has_video": True,
        "has_audio": True,
        "content_length": 1048576,
        "container": "mp4",
        "codecs": "avc1.42001E, mp4a.40.2",
    }
    values.update(overrides)
    return StreamFormatDTO(**values)


def make_video_info(formats=None, **detail_overrides) -> VideoInfoDTO:
    details = {
        "video_id": "dQw4w9WgXcQ",
        "title": "Never Gonna Give You Up",
        "description": "The official video",
        "author_name": "Rick Astley",
        "length_seconds": 212,
        "view_count": 1500000000,
        "thumbnails": [
            ThumbnailDTO(url="https://i.ytimg.com/vi/dQw4w9WgXcQ/default.jpg", width=120, height=90),
            ThumbnailDTO(url="https://i.ytimg.com/vi/dQw4w9WgXcQ/maxresdefault.jpg", width=1280, height=720),
        ],
        "publish_date": "2009-10-25",
        "category": "Music",
        "keywords": ["rick astley", "never gonna give you up"],
        "is_live_content": False,
        "age_restricted": False,
    }
    details.update(detail_overrides)
    if formats is None:
        formats = [
            make_format(),
            make_format(url="https://video/1080", quality_label="1080p", has_audio=False,
                        mime_type='video/mp4; codecs="avc1.640028"'),
            make_format(url="https://video/720webm", quality_label="720p", has_audio=False,
                        mime_type='video/webm; codecs="vp9"', container="webm"),
            make_format(url="https://audio/m4a", quality_label=None, audio_quality="medium", has_video=False,
                        mime_type='audio/mp4; codecs="mp4a.40.2"'),
            make_format(url="https://audio/opus", quality_label=None, audio_quality="medium", has_video=False,
                        mime_type='audio/webm; codecs="opus"', container="webm"),
        ]
    return VideoInfoDTO(details=VideoMetadataDTO(**details), formats=formats)


def make_search_result(index: int) -> SearchResultDTO:
    video_id = f"video{index:06d}"
    return SearchResultDTO(
        videoId=video_id,
        title=f"Result {index}",
        description="description",
        duration="3:32",
        views=100 * index,
        uploaded="2020-01-01 00:00:00",
        thumbnail=f"https://i.ytimg.com/vi/{video_id}/hqdefault.jpg",
        author="Channel",
        url=f"https://www.youtube.com/watch?v={video_id}",
    )


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(environment="development", youtube_api_key="test-key")


@pytest.fixture
def youtube_service(config):
    """Real URL validation, mocked network calls."""
    service = YoutubeService(config)
    service.get_info = AsyncMock(return_value=make_video_info())
    service.search = AsyncMock(return_value=[make_search_result(i) for i in range(5)])
    return service


@pytest.fixture
def app(config, youtube_service):
    return create_app(config, youtube=youtube_service)


@pytest.fixture
def client(app):
    # 500 응답을 검증하기 위해 서버 예외를 다시 던지지 않음
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
