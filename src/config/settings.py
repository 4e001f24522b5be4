"""
Application settings and configuration
"""

import os
from pathlib import Path
from dotenv import load_dotenv
from src.config.constants import SAVE_DEBOUNCE_MS

# Load environment variables from .env file
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


class Settings:
    """Application settings loaded from environment variables"""
    
    # Storage
    DATA_FILE_PATH: str = os.getenv(
        "DATA_FILE_PATH",
        str(Path(__file__).parent.parent.parent / "data" / "app-data.json"),
    )
    DATA_API_URL: str = os.getenv("DATA_API_URL", "http://localhost:8000")
    SAVE_DEBOUNCE_MS: int = int(os.getenv("SAVE_DEBOUNCE_MS", str(SAVE_DEBOUNCE_MS)))
    
    # Application
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: str = os.getenv("LOG_DIR", str(Path(__file__).parent.parent.parent / "logs"))  # empty disables file logging
    WEB_HOST: str = os.getenv("WEB_HOST", "127.0.0.1")
    WEB_PORT: int = int(os.getenv("WEB_PORT", "8000"))
    
    @property
    def save_debounce_seconds(self) -> float:
        return self.SAVE_DEBOUNCE_MS / 1000
    
    @classmethod
    def validate(cls) -> bool:
        """Validate numeric settings and required paths"""
        problems = []
        
        if cls.SAVE_DEBOUNCE_MS < 0:
            problems.append("SAVE_DEBOUNCE_MS must be >= 0")
        if not 0 < cls.WEB_PORT < 65536:
            problems.append("WEB_PORT must be between 1 and 65535")
        if not cls.DATA_FILE_PATH:
            problems.append("DATA_FILE_PATH is empty")
        
        if problems:
            raise ValueError(f"Invalid configuration: {', '.join(problems)}")
        
        return True


# Global settings instance
settings = Settings()
