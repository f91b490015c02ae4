"""Application configuration via pydantic-settings."""

from pydantic import ValidationError
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from app.errors import ConfigError

CONFIG_FILE = "config.json"
STDOUT_SENTINEL = "stdout"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        json_file=CONFIG_FILE,
        extra="ignore",
    )

    # Server
    server_host: str = "0.0.0.0"
    server_port: int = 8080

    # Logging: a file path, or "stdout"
    log_file: str = "nvr_events.log"
    log_level: str = "INFO"

    # Forward sink (disabled when empty)
    notify_url: str = ""
    forward_timeout: float = 10.0

    # Basic Auth for /event and /events (enabled when both are set)
    auth_username: str = ""
    auth_password: str = ""

    # Telegram
    telegram_enabled: bool = False
    telegram_token: str = ""
    telegram_chat_id: str = ""
    telegram_timeout: float = 10.0

    # HIKVision-specific Basic Auth for /hikvision/alarm
    hik_enabled: bool = False
    hik_username: str = ""
    hik_password: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            JsonConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @property
    def basic_auth_enabled(self) -> bool:
        return bool(self.auth_username and self.auth_password)

    @property
    def hik_auth_enabled(self) -> bool:
        return self.hik_enabled and bool(self.hik_username)

    @property
    def telegram_configured(self) -> bool:
        return self.telegram_enabled and bool(self.telegram_token and self.telegram_chat_id)

    @property
    def log_to_stdout(self) -> bool:
        return self.log_file == STDOUT_SENTINEL


def load_settings(**overrides) -> Settings:
    """Build Settings from all sources, raising ConfigError on bad input."""
    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise ConfigError(f"invalid configuration: {e}") from e
    except ValueError as e:
        # json.JSONDecodeError, or SettingsError from a source
        raise ConfigError(f"error parsing configuration ({CONFIG_FILE}): {e}") from e
