from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    PROJECT_NAME: str = "Portal de Acceso"
    DATABASE_URL: str = "sqlite:///./portal.db" # Default to SQLite for simplicity, can be changed
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*" # Comma separated

    # Asset directories, derived from PUBLIC_DIR when left empty
    PUBLIC_DIR: str = "./public"
    BACKGROUNDS_DIR: Optional[str] = None
    SYSTEM_IMAGES_DIR: Optional[str] = None
    MAX_UPLOAD_BYTES: int = 100 * 1024 * 1024
    THUMBNAIL_SIZE: int = 128

    DEFAULT_ADMIN_USERNAME: str = "admin"
    DEFAULT_ADMIN_PASSWORD: str = "admin123" # Change in production
    BCRYPT_ROUNDS: int = 10
    SEED_SAMPLE_CONTENT: bool = True

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def backgrounds_dir(self) -> str:
        return self.BACKGROUNDS_DIR or f"{self.PUBLIC_DIR}/backgrounds"

    @property
    def system_images_dir(self) -> str:
        return self.SYSTEM_IMAGES_DIR or f"{self.PUBLIC_DIR}/system-images"

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

settings = Settings()
