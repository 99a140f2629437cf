from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    app_host: str = "0.0.0.0"
    app_port: int = 8000

    database_url: str = "postgresql+psycopg://app:app@db:5432/app"
    redis_url: str = "redis://redis:6379/0"

    jwt_secret: str = "dev-secret-change-me"
    jwt_issuer: str = "org-accounts-api"
    jwt_audience: str = "org-accounts-api"
    jwt_expires_minutes: int = 60

    # bcrypt work factor
    bcrypt_rounds: int = 10

    log_level: str = "info"
    log_format: str = "json"

    # rate limiting (redis)
    rate_limit_enabled: bool = True
    rate_limit_auth_register_per_min: int = 20
    rate_limit_auth_login_per_min: int = 30

settings = Settings()
