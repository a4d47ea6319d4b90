import re

from domain.DTO.DTO import StreamFormatDTO, VideoInfoDTO, VideoMetadataDTO
from domain.DTO.VideoInfoDTO import (
    AudioFormatGroupDTO,
    AudioFormatOptionDTO,
    ClassifiedResponseDTO,
    FormatOptionsDTO,
    VideoFormatGroupDTO,
    VideoFormatOptionDTO,
)

# 다운로드 url 유효 시간 (sec)
EXPIRES_IN_SECONDS = "21540"

QUALITY_PATTERN = re.compile(r"(\d+)p")


def extract_quality_number(quality: str | None) -> int:
    """'1080p60' -> 1080, 패턴이 없으면 0"""
    if not quality:
        return 0
    match = QUALITY_PATTERN.search(quality)
    return int(match.group(1)) if match else 0


def partition_formats(formats: list[StreamFormatDTO]) -> tuple[list[StreamFormatDTO], list[StreamFormatDTO]]:
    """
    video: 영상이 있는 포맷 전부 (video-only + 오디오 포함 영상)
    audio: 오디오만 있는 포맷
    둘 다 없는 포맷(스토리보드 등)은 버림
    """
    video = [fmt for fmt in formats if fmt.has_video]
    audio = [fmt for fmt in formats if fmt.has_audio and not fmt.has_video]
    return video, audio


def matches_container(container: str | None, mime_type: str | None, token: str) -> bool:
    return container == token or token in (mime_type or "")


def to_video_option(fmt: StreamFormatDTO) -> VideoFormatOptionDTO:
    return VideoFormatOptionDTO(
        quality=fmt.quality_label or "unknown",
        url=fmt.url,
        mimeType=fmt.mime_type,
        hasAudio=fmt.has_audio,
        fileSize=int(fmt.content_length) if fmt.content_length else None,
        container=fmt.container,
        codecs=fmt.codecs,
    )


def to_audio_option(fmt: StreamFormatDTO) -> AudioFormatOptionDTO:
    return AudioFormatOptionDTO(
        quality=fmt.audio_quality or "audio",
        url=fmt.url,
        mimeType=fmt.mime_type,
        hasAudio=True,
        fileSize=int(fmt.content_length) if fmt.content_length else None,
        container=fmt.container,
    )


def build_format_options(formats: list[StreamFormatDTO]) -> FormatOptionsDTO:
    video, audio = partition_formats(formats)

    # 해상도 내림차순 (sorted 는 stable)
    video_options = sorted(
        (to_video_option(fmt) for fmt in video),
        key=lambda option: extract_quality_number(option.quality),
        reverse=True,
    )
    audio_options = [to_audio_option(fmt) for fmt in audio]

    return FormatOptionsDTO(
        video=VideoFormatGroupDTO(
            mp4=[o for o in video_options if matches_container(o.container, o.mimeType, "mp4")],
            webm=[o for o in video_options if matches_container(o.container, o.mimeType, "webm")],
        ),
        audio=AudioFormatGroupDTO(
            mp3=[o for o in audio_options if matches_container(o.container, o.mimeType, "mp4")],
            webm=[o for o in audio_options if matches_container(o.container, o.mimeType, "webm")],
        ),
    )


def best_thumbnail(details: VideoMetadataDTO) -> str:
    return details.thumbnails[-1].url if details.thumbnails else ""


def as_text(value: int | None) -> str | None:
    return str(value) if value is not None else None


def classify_video(info: VideoInfoDTO) -> ClassifiedResponseDTO:
    details = info.details
    return ClassifiedResponseDTO(
        title=details.title,
        image=best_thumbnail(details),
        description=details.description or "",
        lengthSeconds=as_text(details.length_seconds),
        author=details.author_name or "Unknown",
        viewCount=as_text(details.view_count),
        expiresInSeconds=EXPIRES_IN_SECONDS,
        format_options=build_format_options(info.formats),
    )
