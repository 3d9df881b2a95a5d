# review_catalog/core/config.py
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = Field(default="review_catalog", alias="APP_NAME")
    env: str = Field(default="local", alias="ENV")

    servicedb_url: str = Field(
        default="http://servicedb:8080",
        alias="SERVICEDB_URL"
    )
    servicedb_timeout: float = Field(default=5.0, alias="SERVICEDB_TIMEOUT")
    servicedb_connect_timeout: float = Field(
        default=3.0,
        alias="SERVICEDB_CONNECT_TIMEOUT"
    )
    servicedb_max_connections: int = Field(
        default=50,
        alias="SERVICEDB_MAX_CONNECTIONS"
    )

    sentry_dsn: str = Field(default="", alias="SENTRY_DSN")
    sentry_test_enabled: bool = Field(default=False,
                                      alias="SENTRY_TEST_ENABLED")
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
