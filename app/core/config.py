from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    SUPABASE_URL: str
    SUPABASE_SERVICE_KEY: str
    SUPABASE_ANON_KEY: str

    MEDIA_BUCKET: str = "media"
    MAX_VIDEO_SIZE: int = 100 * 1024 * 1024
    MAX_IMAGE_SIZE: int = 5 * 1024 * 1024

    CORS_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    @property
    def MEDIA_PUBLIC_URL(self) -> str:
        return f"{self.SUPABASE_URL}/storage/v1/object/public/{self.MEDIA_BUCKET}/"

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
