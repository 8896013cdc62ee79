from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # relative to the working directory the scheduler starts the worker in
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="TierCleaner", validation_alias="APP_NAME")
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        validation_alias="APP_ENV",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_dir: Path = Field(
        default=Path("logs"),
        validation_alias="LOG_DIR",
    )

    # Cleaner policy
    consistency_delay: int = Field(
        default=86400,
        ge=0,
        validation_alias="CONSISTENCY_DELAY",
        description="Seconds a file must stay DUPLICATED before its local copy may be removed.",
    )
    delete_local: bool = Field(
        default=False,
        validation_alias="DELETE_LOCAL",
        description="Master switch. When false the cleaner selects and deletes nothing.",
    )
    max_task_runtime: int = Field(
        default=3600,
        gt=0,
        validation_alias="MAX_TASK_RUNTIME",
        description="Seconds one invocation may keep picking up new files.",
    )

    # MongoDB
    mongo_uri: str = Field(
        default="mongodb://localhost:27017",
        validation_alias="MONGO_URI",
    )
    mongo_db: str = Field(default="tier_cleaner", validation_alias="MONGO_DB")
    mongo_file_state_collection: str = Field(
        default="file_state",
        validation_alias="MONGO_FILE_STATE_COLLECTION",
    )
    mongo_files_collection: str = Field(
        default="files",
        validation_alias="MONGO_FILES_COLLECTION",
    )

    # Local tier (fsspec)
    local_base_url: str = Field(
        default="filedir",
        validation_alias="LOCAL_BASE_URL",
    )
    local_storage_options: dict = Field(default_factory=dict, validation_alias="LOCAL_STORAGE_OPTIONS")

    # Remote tier (fsspec, e.g. s3://bucket/prefix)
    remote_base_url: str = Field(
        default="s3://tier-cleaner",
        validation_alias="REMOTE_BASE_URL",
    )
    remote_storage_options: dict = Field(
        default_factory=dict,
        validation_alias="REMOTE_STORAGE_OPTIONS",
    )


# Global settings instance
settings = Settings()
