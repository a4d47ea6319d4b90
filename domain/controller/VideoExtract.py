import logging

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from common.exceptionHandler.Exceptions import AgeRestrictedError, ResolverError, VideoUnavailableError
from domain.DTO.VideoInfoDTO import VideoDetailsDTO
from domain.service.FormatClassifier import best_thumbnail, classify_video
from domain.service.Youtube import YoutubeService, get_youtube_service

log = logging.getLogger(__name__)

router = APIRouter()

SUPPORTED_URL_FORMATS = [
    "https://www.youtube.com/watch?v=VIDEO_ID",
    "https://youtu.be/VIDEO_ID",
    "https://www.youtube.com/embed/VIDEO_ID",
]


# main app을 라우팅
def init_VideoExtract_controller(app):
    app.include_router(router)


def error_response(status_code: int, content: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content)


# 영상 다운로드 링크 추출 controller
@router.get("/extract")
async def extract(url: str | None = None,
                  youtube: YoutubeService = Depends(get_youtube_service)):
    if not url:
        return error_response(400, {
            "error": "URL parameter is required",
            "example": "/extract?url=https://www.youtube.com/watch?v=VIDEO_ID"
        })

    if not youtube.validate_url(url):
        return error_response(400, {
            "error": "Invalid YouTube URL",
            "supported_formats": SUPPORTED_URL_FORMATS
        })

    log.info(f"Fetching info for: {url}")

    try:
        video_info = await youtube.get_info(url)
    except VideoUnavailableError as e:
        log.error(f"Video unavailable: {e.message}")
        return error_response(404, {
            "error": "Video not found or unavailable",
            "details": "The video may have been removed or made private"
        })
    except AgeRestrictedError as e:
        log.error(f"Age-restricted: {e.message}")
        return error_response(403, {
            "error": "Age-restricted content",
            "details": "This video is age-restricted and cannot be downloaded"
        })
    except ResolverError as e:
        log.error(f"Resolver error: {e.message}")
        return error_response(500, {
            "error": "Failed to fetch video information from YouTube",
            "details": "YouTube may have changed their API. Please try again later.",
            "technical": e.message
        })

    # 다운로드 가능한 포맷이 없는 경우 (라이브 등)
    if not video_info.formats:
        return error_response(500, {
            "error": "No downloadable formats available",
            "details": "The video might be live streaming or protected"
        })

    return JSONResponse(status_code=200, content=classify_video(video_info).model_dump())


# 영상 상세 정보 controller (포맷 제외)
@router.get("/details")
async def details(url: str | None = None,
                  youtube: YoutubeService = Depends(get_youtube_service)):
    if not url:
        return error_response(400, {"error": "URL parameter is required"})

    if not youtube.validate_url(url):
        return error_response(400, {"error": "Invalid YouTube URL"})

    try:
        video_info = await youtube.get_info(url)
    except ResolverError as e:
        log.error(f"Details error: {e.message}")
        return error_response(500, {
            "error": "Failed to get video details",
            "details": e.message
        })

    info = video_info.details
    video_details = VideoDetailsDTO(
        title=info.title,
        description=info.description,
        lengthSeconds=str(info.length_seconds) if info.length_seconds is not None else None,
        author=info.author_name,
        thumbnail=best_thumbnail(info) or None,
        viewCount=str(info.view_count) if info.view_count is not None else None,
        publishDate=info.publish_date,
        category=info.category,
        keywords=info.keywords,
        isLive=info.is_live_content,
        isAgeRestricted=info.age_restricted,
        videoId=info.video_id,
    )
    return JSONResponse(status_code=200, content=video_details.model_dump())


# 여러 영상 한번에 추출 (순차 처리, 실패한 url 은 결과에 기록하고 계속 진행)
@router.get("/bulk-extract")
async def bulk_extract(urls: str | None = None,
                       youtube: YoutubeService = Depends(get_youtube_service)):
    if not urls:
        return error_response(400, {
            "error": "URLs parameter is required",
            "example": "/bulk-extract?urls=URL1,URL2,URL3"
        })

    url_list = [url.strip() for url in urls.split(",")]
    results = []

    for url in url_list:
        if not youtube.validate_url(url):
            results.append({"url": url, "status": "error", "error": "Invalid YouTube URL"})
            continue

        try:
            video_info = await youtube.get_info(url)
            data = classify_video(video_info).model_dump()
        except Exception as e:
            log.error(f"Bulk extract failed for {url}: {e}")
            results.append({"url": url, "status": "error", "error": str(e)})
            continue

        results.append({"url": url, "status": "success", "data": data})

    return JSONResponse(
        status_code=200,
        content={
            "total": len(url_list),
            "successful": sum(1 for result in results if result["status"] == "success"),
            "failed": sum(1 for result in results if result["status"] == "error"),
            "results": results
        }
    )
