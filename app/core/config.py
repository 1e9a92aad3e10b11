from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    OPENAI_API_KEY: str
    OPENAI_MODEL: str = "gpt-4o"
    MONGO_URI: str
    MONGO_DB: str = "language_coach"
    LOG_LEVEL: str = "INFO"
    CORS_ALLOW_ORIGINS: str = "*"

    STUDY_PLAN_MAX_TOKENS: int = 500
    CHAT_MAX_TOKENS: int = 300
    CHAT_TEMPERATURE: float = 0.7
    CORRECTION_MAX_TOKENS: int = 200
    CORRECTION_TEMPERATURE: float = 0.1
    CHAT_HISTORY_LIMIT: int = 10

    class Config:
        env_file = ".env"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ALLOW_ORIGINS.split(",") if o.strip()]

settings = Settings()
