"""Core application configuration module."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings."""

    # Application
    app_name: str = "ShopApp Backend"
    app_version: str = "1.0.0"
    app_root_path: str = ""
    debug: bool = False

    # Database
    mongo_uri: str = "mongodb://localhost:27017"
    mongodb_name: str = "shopapp"
    mongodb_username: str = ""
    mongodb_password: str = ""
    products_collection: str = "products"

    # Pagination
    default_page_size: int = 10

    # CORS
    cors_origins: list = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:8080",
        "http://127.0.0.1:8080",
    ]

    # Logging
    log_level: str = "INFO"
    log_file: str = ""
    log_colors: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
