"""Configuration schema — validates restyle.yml."""

from pydantic import BaseModel, field_validator

KNOWN_PROVIDERS = ("openai", "anthropic", "google")


class AppConfig(BaseModel):
    """Top-level configuration loaded from restyle.yml.

    Every field has a default so the tool runs without a config file.
    """

    default_provider: str = "openai"

    # Per-provider model override, e.g. {"anthropic": "claude-3-haiku-20240307"}
    models: dict[str, str] = {}

    # Credentials
    credentials_file: str = "~/.config/restyle/credentials.json"
    user: str = "default"

    # Output / history
    output_directory: str = "./output"
    save_history: bool = True

    # Provider calls
    max_tokens: int = 4000
    request_timeout: float | None = None  # None = SDK default
    max_retries: int = 2

    @field_validator("default_provider")
    @classmethod
    def check_provider(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in KNOWN_PROVIDERS:
            raise ValueError(
                f"Unknown provider {value!r}; expected one of {', '.join(KNOWN_PROVIDERS)}"
            )
        return value

    @field_validator("models")
    @classmethod
    def check_model_providers(cls, value: dict[str, str]) -> dict[str, str]:
        unknown = [p for p in value if p not in KNOWN_PROVIDERS]
        if unknown:
            raise ValueError(f"Model overrides for unknown provider(s): {', '.join(unknown)}")
        return value

    @field_validator("max_tokens")
    @classmethod
    def check_max_tokens(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("max_tokens must be positive")
        return value

    @field_validator("max_retries")
    @classmethod
    def check_max_retries(cls, value: int) -> int:
        if value < 0:
            raise ValueError("max_retries cannot be negative")
        return value
