"""
Configuration settings for the API.
Environment variables (prefixed ``LOCALE_AUDIT_``) override defaults.
"""
import os
from dataclasses import dataclass, field
from typing import List

_ENV_PREFIX = "LOCALE_AUDIT_"


@dataclass
class Settings:
    """API Configuration"""

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # CORS
    CORS_ORIGINS: List[str] = field(default_factory=lambda: ["*"])

    # Project served when a request omits `root`
    DEFAULT_ROOT: str = "."
    MAX_WORKERS: int = 8

    def __post_init__(self):
        """Load from environment variables"""
        for key in self.__dataclass_fields__:
            env_value = os.getenv(_ENV_PREFIX + key)
            if env_value is not None:
                field_type = self.__dataclass_fields__[key].type
                if field_type in (int, "int"):
                    setattr(self, key, int(env_value))
                elif field_type in (List[str], "List[str]"):
                    setattr(self, key, env_value.split(","))
                else:
                    setattr(self, key, env_value)


# Global settings instance
settings = Settings()
