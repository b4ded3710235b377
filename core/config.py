from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

from core.errors import MissingCredentialError

class Settings(BaseSettings):
    port: int = Field(3000, alias="PORT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    openai_api_key: Optional[str] = Field(None, alias="OPENAI_API_KEY")
    openai_base_url: str = Field("https://api.openai.com/v1", alias="OPENAI_BASE_URL")
    openai_model: str = Field("gpt-4o-mini", alias="OPENAI_MODEL")
    openai_temperature: float = Field(0.4, alias="OPENAI_TEMPERATURE")
    openai_timeout_seconds: float = Field(300.0, alias="OPENAI_TIMEOUT_SECONDS")

    cors_origins: List[str] = Field(["*"], alias="CORS_ORIGINS")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        case_sensitive=True,
    )

    @property
    def completions_url(self) -> str:
        return f"{self.openai_base_url.rstrip('/')}/chat/completions"

    @property
    def public_base_url(self) -> str:
        return f"http://localhost:{self.port}"

    def require_openai_key(self) -> str:
        if not self.openai_api_key:
            raise MissingCredentialError("OPENAI_API_KEY")
        return self.openai_api_key

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (init_settings, env_settings, dotenv_settings, file_secret_settings)

settings = Settings()
