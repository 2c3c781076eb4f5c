import os
from dotenv import load_dotenv
from fastapi import Request

load_dotenv()


class Settings:
    def __init__(self, **overrides):
        self.DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./learn_note.db")
        self.JWT_SECRET = os.getenv("JWT_SECRET", "not_a_real_password")
        self.JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
        self.JWT_EXPIRY_DAYS = int(os.getenv("JWT_EXPIRY_DAYS", 7))
        self.CLIENT_ORIGIN = os.getenv("CLIENT_ORIGIN", "http://localhost:3000")
        self.CORS_ORIGINS = os.getenv("CORS_ORIGINS", "")
        self.DEBUG = os.getenv("DEBUG", "False").lower() == "true"
        self.APP_VERSION = os.getenv("APP_VERSION", "0.1.0")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
        self.LOG_FILE = os.getenv("LOG_FILE", "")
        self.META_FETCH_TIMEOUT = float(os.getenv("META_FETCH_TIMEOUT", 10))

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise AttributeError(f"Unknown setting: {key}")
            setattr(self, key, value)

    @property
    def allowed_origins(self):
        origins = [self.CLIENT_ORIGIN]
        if self.CORS_ORIGINS:
            origins.extend(o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip())
        return origins


settings = Settings()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
