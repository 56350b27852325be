from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_env: str = "dev"
    log_level: str = "info"
    log_dir: str = "logs"
    amount_floor: int = 1000
    consistency_tolerance: int = 1000
    vat_rate: float = 0.19
    debit_rate_tolerance: float = 0.15
    # field_id -> exact amount strings seen in earlier real declarations
    known_values: dict[str, list[str]] = {}

    @field_validator("log_level")
    @classmethod
    def _lowercase_level(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("known_values")
    @classmethod
    def _strip_samples(cls, value: dict[str, list[str]]) -> dict[str, list[str]]:
        """Drop blank samples; field ids are checked against the catalog by the engine."""

        return {
            field_id.strip(): [sample.strip() for sample in samples if sample.strip()]
            for field_id, samples in value.items()
        }


settings = Settings()
