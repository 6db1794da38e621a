import os
from dotenv import load_dotenv


load_dotenv()


class Settings:
    """Application settings read from the environment (or a local .env file)."""

    def __init__(self):
        self.database_url = os.getenv("DATABASE_URL", "sqlite:///./data/shareit.db")
        self.secret_key = os.getenv("SECRET_KEY", "secure-secret-key-1234567890")
        self.algorithm = os.getenv("ALGORITHM", "HS256")
        self.access_token_expire_minutes = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 30))
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
