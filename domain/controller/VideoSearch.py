import logging

from fastapi import APIRouter, Depends, Query
from starlette.responses import JSONResponse

from common.exceptionHandler.Exceptions import SearchError
from domain.DTO.VideoInfoDTO import SearchResponseDTO
from domain.service.Youtube import SEARCH_MAX_RESULTS, YoutubeService, get_youtube_service

log = logging.getLogger(__name__)

router = APIRouter()


def init_VideoSearch_controller(app):
    app.include_router(router)


# 유튜브 검색 controller
@router.get("/search")
async def search(q: str | None = None,
                 limit: int = Query(10, ge=0),  # 값이 없을 경우 기본 10
                 youtube: YoutubeService = Depends(get_youtube_service)):
    if not q:
        return JSONResponse(
            status_code=400,
            content={
                "error": 'Query parameter "q" is required',
                "example": "/search?q=javascript+tutorial&limit=10"
            }
        )

    try:
        videos = (await youtube.search(q, max_results=min(limit, SEARCH_MAX_RESULTS)))[:limit]
    except SearchError as e:
        log.error(f"Search error: {e.message}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Search failed",
                "details": e.message
            }
        )

    response = SearchResponseDTO(query=q, results=videos, total=len(videos))
    return JSONResponse(status_code=200, content=response.model_dump())
