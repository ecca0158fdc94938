from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Claude API Configuration
    anthropic_api_key: str = "your_claude_api_key_here"
    claude_model: str = "claude-sonnet-4-20250514"
    generation_max_tokens: int = 1000
    # Kept low: consultation answers favour consistency over variety
    generation_temperature: float = 0.3
    generation_timeout: float = 30.0

    # Response enhancement (lawyer feedback layer)
    enable_feedback_enhancer: bool = True
    enhancement_timeout: float = 10.0

    # Database Configuration
    database_url: str = "sqlite:///./legal_consultation.db"

    # Legal knowledge base
    knowledge_base_path: Optional[str] = None
    max_references: int = 5

    # Firm context cache
    firm_context_ttl_seconds: float = 3600.0

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000"

    def get_cors_origins(self) -> list:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

# Global settings instance
settings = Settings()
