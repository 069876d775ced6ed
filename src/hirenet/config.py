from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


def _split_csv(value: str) -> list[str]:
    return [item.strip().lower() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "HireNet"
    app_env: str = "development"
    app_host: str = "127.0.0.1"
    app_port: int = 5000
    log_level: str = "INFO"

    secret_key: str = "change-me"
    jwt_algorithm: str = "HS256"
    session_ttl_min: int = 720

    database_url: str = "sqlite:///./data/hirenet.db"
    data_dir: Path = Path("./data")
    upload_dir: Path = Path("./data/uploads")

    resume_extensions: str = ".pdf,.doc,.docx"
    resume_max_bytes: int = 5 * 1024 * 1024
    image_extensions: str = ".jpg,.jpeg,.png,.gif"
    image_max_bytes: int = 2 * 1024 * 1024

    search_min_query_length: int = 2
    search_result_limit: int = 10
    search_result_max_limit: int = 100
    company_sample_limit: int = 100
    company_search_max_limit: int = 1000
    company_list_max_limit: int = 50000
    job_list_default_limit: int = 50
    job_list_max_limit: int = 500
    group_list_default_limit: int = 20
    group_list_max_limit: int = 100

    cors_origins: str = "http://127.0.0.1:5000"

    @field_validator("app_env")
    @classmethod
    def validate_env(cls, value: str) -> str:
        allowed = {"development", "staging", "production", "test"}
        if value not in allowed:
            raise ValueError(f"app_env must be one of {sorted(allowed)}")
        return value

    @field_validator("search_min_query_length", "search_result_limit")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be at least 1")
        return value

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def resume_extension_list(self) -> list[str]:
        return _split_csv(self.resume_extensions)

    @property
    def image_extension_list(self) -> list[str]:
        return _split_csv(self.image_extensions)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
