from pydantic_settings import BaseSettings
from pydantic import ConfigDict


APP_VERSION = "0.1.0"


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./petring.db"
    BOT_TOKEN: str
    ACCESS_TOKEN_SECRET: str
    REFRESH_TOKEN_SECRET: str
    ACCESS_TOKEN_TTL_SECONDS: int = 300
    REFRESH_TOKEN_TTL_SECONDS: int = 86400
    HOST: str = "0.0.0.0"
    PORT: int = 8081
    LOG_LEVEL: str = "INFO"

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore"
    )


settings = Settings()
