from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "staketracker"
    database_url_override: str = ""  # Full SQLAlchemy URL, wins over db_* when set
    api_key: str = "change-me"
    allowed_origins: str = "*"
    coingecko_api_key: str = ""
    coingecko_base_url: str = "https://api.coingecko.com"
    price_cache_ttl_ms: int = 60_000
    price_timeout_seconds: float = 10.0
    price_rate_per_second: float = 10.0
    default_currency: str = "ltc"
    debug: bool = False

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    @property
    def cors_origins(self) -> list[str]:
        if self.allowed_origins.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    class Config:
        env_file = ".env"


settings = Settings()
