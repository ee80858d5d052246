"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings

from oledsketch.engine.calls import CallStyle


class Settings(BaseSettings):
    oledsketch_env: str = "development"
    oledsketch_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Generated code
    display_receiver: str = "display"
    on_color: str = "SSD1306_WHITE"
    off_color: str = "SSD1306_BLACK"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    def call_style(self) -> CallStyle:
        return CallStyle(
            receiver=self.display_receiver,
            on_color=self.on_color,
            off_color=self.off_color,
        )


settings = Settings()
