import os


class Settings:
    def __init__(self):
        self.app_name = "Grndwrk Quotes"
        self.api_version = "1.0.0"
        self.environment = os.getenv("ENVIRONMENT", "development")
        self.database_url = os.getenv("DATABASE_URL", "sqlite:///./grndwrk.db")
        self.media_root = os.getenv("MEDIA_ROOT", "./media")
        self.media_base_url = os.getenv("MEDIA_BASE_URL", "http://localhost:8000/media")
        self.photo_bucket = os.getenv("PHOTO_BUCKET", "quote-photos")
        # Device-local JSON store for availability and overlay maps; empty means in-memory
        self.local_store_path = os.getenv("LOCAL_STORE_PATH", "./local_store.json")
        self.estimate_variance = float(os.getenv("ESTIMATE_VARIANCE", "0.10"))
        self.default_square_footage = int(os.getenv("DEFAULT_SQUARE_FOOTAGE", "1000"))
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        self.cors_origins = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
            if origin.strip()
        ]


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
