import json

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str

    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    BACKEND_CORS_ORIGINS: str = '["http://localhost:5173","http://localhost:3000"]'

    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "Course Curriculum API"
    DEBUG: bool = False

    # Used until an admin stores a value in video_completion_settings
    DEFAULT_COMPLETION_THRESHOLD: int = 80
    # Minimum wall-clock gap between two persisted samples of one player
    PROGRESS_UPDATE_THRESHOLD_MS: int = 5000
    PLAYER_SESSION_IDLE_SECONDS: int = 3600

    # When True only reviewed (approved) homework unlocks the next lecture
    HOMEWORK_REQUIRES_APPROVAL: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    @property
    def cors_origins(self) -> list[str]:
        if isinstance(self.BACKEND_CORS_ORIGINS, str):
            try:
                parsed: list[str] = json.loads(self.BACKEND_CORS_ORIGINS)
                return parsed
            except json.JSONDecodeError:
                return ["http://localhost:5173", "http://localhost:3000"]
        return self.BACKEND_CORS_ORIGINS


settings = Settings()
