from typing import List

from pydantic_settings import BaseSettings
from functools import lru_cache

class Settings(BaseSettings):
    # Any SQLAlchemy URL. "sqlite://" keeps everything in memory and is lost on restart.
    DATABASE_URL: str = "sqlite:///./crm.db"
    SQL_ECHO: bool = False

    LOG_LEVEL: str = "INFO"
    ENABLE_METRICS: bool = True

    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    CORS_ORIGINS_STR: str = "http://localhost:3000"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS_STR.split(',')]


    def model_post_init(self, __context) -> None:
        if self.MAX_PAGE_SIZE < 1:
            raise ValueError("MAX_PAGE_SIZE must be at least 1")
        if not 1 <= self.DEFAULT_PAGE_SIZE <= self.MAX_PAGE_SIZE:
            raise ValueError("DEFAULT_PAGE_SIZE must be between 1 and MAX_PAGE_SIZE")


    class Config:
        env_file = ".env"

@lru_cache()
def get_settings():
    return Settings()
