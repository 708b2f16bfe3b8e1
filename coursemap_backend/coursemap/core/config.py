from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite:///./coursemap.db"
    environment: str = "development"
    log_level: str = "INFO"
    prerequisite_depth: int = 5
    prerequisite_depth_limit: int = 10
    cors_origins: list[str] = ["*"]

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
