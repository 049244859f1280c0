from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SPLITQUERY_", env_file=".env", env_ignore_empty=True, extra="ignore"
    )

    DIALECT: str = "mysql"
    # Answer RangeTooSmallError with the single-split fallback instead of raising.
    FALLBACK_ON_RANGE_TOO_SMALL: bool = False
    MAX_SPLIT_COUNT: int | None = None

    LOG_LEVEL: str = "INFO"
    # Used only when OTEL_SDK_DISABLED is set.
    LOG_DIR: str = "./"
    LOG_FILE: str = "splitquery.log"
    SERVICE_NAME: str = "splitquery"

    @field_validator("MAX_SPLIT_COUNT")
    @classmethod
    def _validate_max_split_count(cls, value: int | None) -> int | None:
        if value is not None and value < 1:
            raise ValueError("MAX_SPLIT_COUNT must be at least 1.")
        return value

    def clamp_split_count(self, split_count: int) -> int:
        split_count = max(split_count, 1)
        if self.MAX_SPLIT_COUNT is not None:
            return min(split_count, self.MAX_SPLIT_COUNT)
        return split_count


settings = Settings()  # type: ignore
