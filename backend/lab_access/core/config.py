from pydantic_settings import BaseSettings
from typing import List, Union

import os

class Settings(BaseSettings):
    # backend/lab_access/core/config.py -> backend/
    BASE_DIR: str = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    PROJECT_ROOT: str = os.path.dirname(BASE_DIR)

    # Strip trailing whitespace that batch scripts tend to leave behind
    DATA_DIR: str = os.path.normpath(os.getenv("DATA_DIR", os.path.join(PROJECT_ROOT, "data")).strip())

    DATABASE_URL: str = f"sqlite:///{os.path.join(DATA_DIR, 'lab_access.db')}"

    # JWT
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480  # 8 hours

    # bcrypt cost factor; tests lower it to keep hashing fast
    BCRYPT_ROUNDS: int = 12

    # Lab capacity (numbered systems available for student sessions)
    MAX_SYSTEMS: int = 28

    LOG_LEVEL: str = "INFO"

    # CORS - can be comma-separated string or list
    CORS_ORIGINS: Union[str, List[str]] = "http://localhost:5173"

    @property
    def cors_origins_list(self) -> List[str]:
        """Convert CORS_ORIGINS to list format"""
        if not self.CORS_ORIGINS:
            return ["http://localhost:5173"]
        if isinstance(self.CORS_ORIGINS, list):
            origins = self.CORS_ORIGINS
        else:
            origins = [
                origin.strip()
                for origin in self.CORS_ORIGINS.split(",")
                if origin.strip()
            ]
        if "*" in origins:
            raise ValueError(
                "CORS_ORIGINS cannot contain '*' when allow_credentials=True. "
                "Use explicit origins like http://localhost:5173"
            )
        return origins

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
