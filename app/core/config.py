from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DEBUG: bool = False
    DATABASE_URL: str = "sqlite+aiosqlite:///./notes.db"
    REDIS_URL: str = "redis://localhost:6379/0"
    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    VIEW_CACHE_TTL_SECONDS: int = 300
    ALLOWED_HOSTS: str = "*"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = [".env"]
        case_sensitive = True

    @property
    def allowed_hosts(self) -> list[str]:
        return [host.strip() for host in self.ALLOWED_HOSTS.split(",") if host.strip()]


settings = Settings()
