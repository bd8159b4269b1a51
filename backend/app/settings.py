from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field

class Settings(BaseSettings):
	# Generative Language API key; GOOGLE_API_KEY is accepted for older deployments
	gemini_api_key: str | None = Field(default=None, validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_API_KEY"))
	gemini_model: str = Field(default="gemini-flash-latest", validation_alias="GEMINI_MODEL")
	gemini_base_url: str = Field(default="https://generativelanguage.googleapis.com/v1beta", validation_alias="GEMINI_BASE_URL")
	gemini_timeout_seconds: float = Field(default=30, validation_alias="GEMINI_TIMEOUT_SECONDS")
	# Sampling for problem generation (higher temperature for more varied scenarios)
	gemini_temperature: float = Field(default=0.85, validation_alias="GEMINI_TEMPERATURE")
	gemini_top_p: float = Field(default=0.95, validation_alias="GEMINI_TOP_P")
	gemini_top_k: int = Field(default=40, validation_alias="GEMINI_TOP_K")

	# Database (required; the engine refuses to start without it)
	database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")

	# Problem generation
	generation_attempts: int = Field(default=3, validation_alias="GENERATION_ATTEMPTS")
	recent_window: int = Field(default=10, validation_alias="RECENT_WINDOW")

	# Grading and history
	answer_tolerance: float = Field(default=1e-9, validation_alias="ANSWER_TOLERANCE")
	score_window: int = Field(default=100, validation_alias="SCORE_WINDOW")

	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
