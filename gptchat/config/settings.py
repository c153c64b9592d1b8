from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):

    openai_api_token: str = Field(default="", repr=False)

    llm_model: str = "gpt-3.5-turbo-0301"
    llm_url: str = "https://api.openai.com/v1/chat/completions"
    llm_timeout: float = 60.0

    # Optional context-setting message placed first in every session
    system_prompt: str | None = None

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
