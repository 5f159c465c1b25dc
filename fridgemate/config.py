from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql://postgres:postgres@db:5432/fridgemate"
    anthropic_api_key: str = ""
    openai_api_key: str = ""

    recipe_model: str = "claude-sonnet-4-5-20250929"
    image_model: str = "dall-e-3"
    image_size: str = "1024x1024"

    # External API timeout settings (seconds)
    anthropic_timeout: int = 60
    anthropic_connect_timeout: int = 10
    image_timeout: int = 60

    # Generated recipe images are written here and served from /uploads
    upload_dir: str = "uploads/recipes"

    # Recipe suggestions
    suggestion_count: int = 3
    default_serving_size: int = 2

    # Expiry windows (days)
    default_expiring_days: int = 7
    stats_expiring_days: int = 3

    log_level: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
