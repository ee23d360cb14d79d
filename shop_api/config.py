"""
Configuration for the shop API.

``Settings`` reads every value from environment variables with sensible
defaults, so the service can be pointed at another catalog file or other
ports without code changes.  Values are computed when this module is
imported; set the environment before importing it, or build a
``Settings`` instance explicitly (the tests do this).
"""

import os
from dataclasses import dataclass
from typing import List, Optional


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Shop API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")

    # Location of the catalog document.  Relative paths resolve against the
    # working directory of the process.
    products_file: str = os.getenv("PRODUCTS_FILE", "products.json")

    host: str = os.getenv("HOST", "0.0.0.0")
    http_port: int = int(os.getenv("HTTP_PORT", "80"))
    https_port: int = int(os.getenv("HTTPS_PORT", "443"))

    # TLS material for the encrypted listener.  Certificate renewal happens
    # outside this process; we only read whatever is at these paths on start.
    ssl_keyfile: str = os.getenv("SSL_KEYFILE", "privkey.pem")
    ssl_certfile: str = os.getenv("SSL_CERTFILE", "fullchain.pem")

    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Comma separated list; "*" allows every origin.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Hold one lock across load -> modify -> save.  Store I/O runs in worker
    # threads, so turning this off brings back lost updates between writers.
    serialize_writes: bool = _env_flag("SERIALIZE_WRITES", "true")

    # Random draws before falling back to a sequential scan for a free id.
    id_max_attempts: int = int(os.getenv("ID_MAX_ATTEMPTS", "1000"))

    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
