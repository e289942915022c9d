from __future__ import annotations

from functools import lru_cache
from typing import Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PARTSPLM_",
        env_file=".env",
        extra="ignore",
    )

    # Runtime
    ENVIRONMENT: str = Field(default="dev", description="Environment name")
    HOST: str = Field(default="0.0.0.0", description="Bind host")
    PORT: int = Field(default=7920, description="Bind port")
    LOG_LEVEL: str = Field(default="info", description="Root log level")

    # Database (pricing store)
    DATABASE_URL: str = Field(default="sqlite:///partsplm_dev.db")
    SCHEMA_MODE: str = Field(
        default="create_all",
        description="create_all: auto-create tables (dev), migrations: tables managed externally",
    )

    # Parts catalog
    PARTS_DIR: str = Field(
        default="./data/parts", description="Root directory of the CSV parts catalog"
    )
    STRUCTURE_FILE_EXT: str = Field(
        default=".csv", description="Extension shared by record and structure files"
    )
    ASSEMBLY_PREFIXES: str = Field(
        default="PCA-,ASY-",
        description="Comma-separated identifier prefixes classified as assemblies",
    )
    BOM_MAX_DEPTH: int = Field(
        default=5, ge=0, description="Levels expanded below the root before truncation"
    )
    PARTS_PAGE_LIMIT: int = Field(default=50, ge=1, description="Default page size")

    def assembly_prefixes(self) -> Tuple[str, ...]:
        return tuple(
            p.strip().upper() for p in (self.ASSEMBLY_PREFIXES or "").split(",") if p.strip()
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
