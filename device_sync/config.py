"""
Service configuration read from the environment (and a local .env file).
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables
load_dotenv()


class Settings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = True
    log_level: str = "info"
    keepalive_interval: float = Field(
        default=10.0, gt=0, description="Seconds between keep-alive pings"
    )

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            debug=os.getenv("DEBUG", "true").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "info").lower(),
            keepalive_interval=float(os.getenv("KEEPALIVE_INTERVAL", "10")),
        )
