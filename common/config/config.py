# 서버 설정을 AppConfig 하나로 모아서 create_app 에 전달
import os

from dotenv import load_dotenv
from pydantic import BaseModel

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class AppConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3000
    environment: str = "development"
    log_level: str = "INFO"
    youtube_api_key: str | None = None
    user_agent: str = DEFAULT_USER_AGENT
    cors_origins: list[str] = ["*"]
    public_url: str = "https://ytdownloader-q366.onrender.com"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


def load_config() -> AppConfig:
    # .env 파일 로딩
    load_dotenv()

    origins = os.getenv("CORS_ORIGINS", "*")
    return AppConfig(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
        environment=os.getenv("APP_ENV") or os.getenv("NODE_ENV") or "development",
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        youtube_api_key=os.getenv("YOUTUBE_API_KEY"),
        user_agent=os.getenv("USER_AGENT", DEFAULT_USER_AGENT),
        cors_origins=[origin.strip() for origin in origins.split(",") if origin.strip()],
        public_url=os.getenv("PUBLIC_URL", "https://ytdownloader-q366.onrender.com").rstrip("/"),
    )
