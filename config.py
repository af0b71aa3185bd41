"""
Runtime settings, read from the environment (and a ``.env`` file if present).
"""

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv()


@dataclass
class Settings:
    # CORS origins allowed to call the API; empty disables CORS
    frontend_urls: List[str] = field(default_factory=list)

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Logging
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("FRONTEND_URL", "")
        return cls(
            frontend_urls=[o.strip() for o in origins.split(",") if o.strip()],
            host=os.getenv("HOST", cls.host),
            port=int(os.getenv("PORT", cls.port)),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
        )
