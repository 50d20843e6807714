# mytube/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Literal


class Settings(BaseSettings):
    SECRET_KEY: str = "change-me"
    ACCESS_TOKEN_EXPIRE_MIN: int = 1440

    # flat JSON files: users.json, videos.json, posts.json, ...
    DATA_DIR: str = "./data"

    # uploads are served as-is from PUBLIC_DIR/UPLOADS_SUBDIR
    PUBLIC_DIR: str = "./public"
    UPLOADS_SUBDIR: str = "uploads"

    # "json" = flat files, "local" = sqlite mirror of the same schema
    STORE_BACKEND: Literal["json", "local"] = "json"
    LOCAL_DB_URL: str = "sqlite+aiosqlite:///./data/local.db"

    ALLOWED_ORIGINS: str = "*"

    # multipliers handed to the remote ranker
    RECOMMEND_BOOST_VIEWS: float = 1.2
    RECOMMEND_BOOST_LIKES: float = 1.5

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def allow_origins_list(self) -> List[str]:
        if self.ALLOWED_ORIGINS == "*":
            return ["*"]
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]


settings = Settings()
