from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import computed_field

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # App
    app_name: str = "Content API"
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    # DB settings
    db_user: str = "postgres"
    db_pass: str = "postgres"
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "contents"
    db_command_timeout_seconds: float = 10.0

    # Auth
    jwt_secret: str = "change-me"
    jwt_issuer: str = "content-api"
    jwt_audience: str = "content-api-clients"
    jwt_expires_minutes: int = 60

    # Object storage (S3 compatible)
    s3_bucket: str = "contents"
    s3_region: str = "us-east-1"
    s3_endpoint_url: str | None = None
    s3_access_key_id: str | None = None
    s3_secret_access_key: str | None = None
    s3_public_base_url: str | None = None
    s3_key_prefix: str = "content/"
    upload_max_files: int = 5
    storage_timeout_seconds: float = 15.0

    @computed_field
    @property
    def database_url(self) -> str:
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_pass}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

settings = Settings()
