import logging

import uvicorn  # FastAPI 서버 실행에 필요
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from common.config.config import AppConfig, load_config
from common.exceptionHandler.Handlers import example_url, init_exception_handler
from domain.controller.VideoExtract import init_VideoExtract_controller
from domain.controller.VideoSearch import init_VideoSearch_controller
from domain.service.Youtube import YoutubeService

log = logging.getLogger(__name__)

API_VERSION = "2.0.0"


def configure_logging(config: AppConfig):
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(config: AppConfig, youtube: YoutubeService | None = None) -> FastAPI:
    # FastAPI 앱 초기화
    app = FastAPI(title="YouTube Downloader API", version=API_VERSION)
    app.state.config = config
    app.state.youtube = youtube or YoutubeService(config)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    init_exception_handler(app)
    init_VideoExtract_controller(app)
    init_VideoSearch_controller(app)

    app.add_api_route("/", index, methods=["GET"])
    return app


# 헬스 체크 + API 안내
async def index(request: Request):
    return {
        "message": "YouTube Downloader API is running!",
        "status": "active",
        "version": API_VERSION,
        "endpoints": {
            "extract": "/extract?url=YOUTUBE_URL",
            "search": "/search?q=QUERY",
            "details": "/details?url=YOUTUBE_URL",
            "bulk_extract": "/bulk-extract?urls=URL1,URL2"
        },
        "example": example_url(request)
    }


# 실행 진입점
if __name__ == "__main__":
    config = load_config()
    configure_logging(config)

    log.info(f"YouTube Downloader API running on port {config.port}")
    log.info(f"API Documentation: http://localhost:{config.port}")
    log.info(f"Environment: {config.environment}")

    uvicorn.run(create_app(config), host=config.host, port=config.port)
