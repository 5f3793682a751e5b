from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    hf_api_key: str = ""
    hf_api_base: str = "https://api-inference.huggingface.co/models"
    hf_model: str = "mistralai/Mixtral-8x7B-Instruct-v0.1"
    generation_timeout: float = 60.0
    title_max_new_tokens: int = 64
    description_max_new_tokens: int = 150
    prompt_char_budget: int = 2000

    fetch_timeout: float = 10.0
    fetch_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 Chrome/120.0.0.0 Safari/537.36"
    )
    max_page_bytes: int = 5 * 1024 * 1024

    ocr_language: str = "jpn"
    ocr_timeout: float = 0
    max_image_bytes: int = 10 * 1024 * 1024

    min_content_length: int = 50
    max_text_length: int = 50_000

    log_level: str = "INFO"


settings = Settings()
