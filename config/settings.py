"""
Configuration management using Pydantic Settings.

Environment variables:
- LLM_PROVIDER: 'openai' or 'ollama'
- LLM_MODEL: Model used for flashcard generation
- OPENAI_API_KEY: API key for OpenAI
- OLLAMA_BASE_URL: Base URL for a local Ollama server
- REPORT_FONT_PATH: Optional TTF font for the PDF report
- LOG_LEVEL: Logging level name
"""
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Generative-text service
    llm_provider: str = Field(default="openai")
    llm_model: str = Field(default="gpt-4o-mini")
    openai_api_key: Optional[str] = Field(default=None)
    ollama_base_url: str = Field(default="http://localhost:11434")
    ollama_timeout: int = Field(default=300)
    llm_temperature: float = Field(default=0.3)

    # Document viewer
    viewer_target_dpi: int = Field(default=150)
    viewer_max_image_size: int = Field(default=2048)

    # Report
    report_font_name: str = Field(default="Times-Roman")
    report_bold_font_name: str = Field(default="Times-Bold")
    report_font_path: Optional[str] = Field(default=None)
    report_bold_font_path: Optional[str] = Field(default=None)
    report_font_size: float = Field(default=12.0)
    report_title: str = Field(default="My Notes")

    # API Configuration
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8002)

    log_level: str = Field(default="INFO")

    def get_llm_config(self) -> dict:
        """Get LLM client configuration as dictionary."""
        return {
            'provider': self.llm_provider,
            'model': self.llm_model,
            'api_key': self.openai_api_key,
            'ollama_base_url': self.ollama_base_url,
            'ollama_timeout': self.ollama_timeout,
        }

    def get_report_config(self) -> dict:
        """Get report rendering configuration as dictionary."""
        return {
            'font_name': self.report_font_name,
            'bold_font_name': self.report_bold_font_name,
            'font_path': self.report_font_path,
            'bold_font_path': self.report_bold_font_path,
            'font_size': self.report_font_size,
            'title': self.report_title,
        }


# Global settings instance
settings = Settings()
