from typing import Any, Optional

from pydantic import Field, PostgresDsn, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        extra="allow",
    )

    ENVIRONMENT_NAME: str = "Development"

    @property
    def is_production(self):
        return self.ENVIRONMENT_NAME == "Production"

    PROJECT_NAME: str = "Liquid"
    API_V1_STR: str = "/api/v1"

    POSTGRES_SERVER: Optional[str] = None
    POSTGRES_USER: Optional[str] = None
    POSTGRES_PASSWORD: Optional[str] = None
    POSTGRES_DB: Optional[str] = None
    SQLITE_PATH: str = "./liquid.db"
    SQLALCHEMY_DATABASE_URI: str | None = Field(default=None, validate_default=True)

    # Oracle
    MINIMUM_UPDATE_INTERVAL: int = 60 * 60

    # Cashier defaults, rates in basis points
    DEFAULT_FEE_RATE_MANAGEMENT: int = 200
    DEFAULT_FEE_RATE_PERFORMANCE: int = 2000
    DEFAULT_FEE_RATE_EXIT: int = 100
    DEFAULT_FEE_RATE_INSTANT: int = 500
    DEFAULT_THIRD_PARTY_RATIO_MANAGEMENT: int = 0
    DEFAULT_THIRD_PARTY_RATIO_PERFORMANCE: int = 10000
    DEFAULT_THIRD_PARTY_RATIO_EXIT: int = 0
    # 7 days
    DEFAULT_WITHDRAW_PERIOD: int = 7 * 86400

    # Seq log
    SEQ_SERVER_URL: Optional[str] = None
    SEQ_SERVER_API_KEY: Optional[str] = None
    SEQLOG_CONFIG_PATH: str = "./config/seqlog.yml"

    LOG_DIR: Optional[str] = None

    @field_validator("SQLALCHEMY_DATABASE_URI", mode="before")
    def assemble_db_connection(cls, v: str | None, info: ValidationInfo) -> Any:
        if isinstance(v, str):
            return v
        if not info.data.get("POSTGRES_SERVER"):
            return f"sqlite:///{info.data.get('SQLITE_PATH')}"
        return str(
            PostgresDsn.build(
                scheme="postgresql+psycopg",
                username=info.data.get("POSTGRES_USER"),
                password=info.data.get("POSTGRES_PASSWORD"),
                host=info.data.get("POSTGRES_SERVER"),
                path=f"{info.data.get('POSTGRES_DB') or ''}",
            )
        )

    @property
    def seq_enabled(self) -> bool:
        return bool(self.SEQ_SERVER_URL)


settings = Settings()
