"""
Run the shop API on a plaintext and an encrypted listener.

Both listeners serve the same ``FastAPI`` instance (and therefore the
same ``ProductService`` and catalog file).  The TLS key and certificate
are loaded before anything starts: when they are unreadable the HTTPS
listener is dropped with an error in the log, and plain HTTP keeps
running on its own.
"""

import asyncio
import logging
import ssl
from typing import List, Optional

import uvicorn
from fastapi import FastAPI

from .config import Settings, settings as default_settings
from .main import create_app

logger = logging.getLogger(__name__)


class TLSConfigError(Exception):
    pass


def check_tls_material(keyfile: str, certfile: str) -> None:
    """Fail fast if the key/certificate pair can't be loaded."""
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    try:
        context.load_cert_chain(certfile=certfile, keyfile=keyfile)
    except (OSError, ssl.SSLError) as e:
        raise TLSConfigError(f"cannot load TLS material ({certfile}, {keyfile}): {e}") from e


def build_servers(app: FastAPI, settings: Settings) -> List[uvicorn.Server]:
    servers = [
        uvicorn.Server(
            uvicorn.Config(app, host=settings.host, port=settings.http_port, log_config=None)
        )
    ]

    try:
        check_tls_material(settings.ssl_keyfile, settings.ssl_certfile)
    except TLSConfigError as e:
        logger.error("HTTPS listener disabled: %s", e)
        return servers

    servers.append(
        uvicorn.Server(
            uvicorn.Config(
                app,
                host=settings.host,
                port=settings.https_port,
                ssl_keyfile=settings.ssl_keyfile,
                ssl_certfile=settings.ssl_certfile,
                log_config=None,
            )
        )
    )
    return servers


async def serve(settings: Optional[Settings] = None) -> None:
    settings = settings or default_settings
    app = create_app(settings)
    servers = build_servers(app, settings)
    for s in servers:
        scheme = "https" if s.config.ssl_keyfile else "http"
        logger.info("%s listener on %s:%s", scheme.upper(), s.config.host, s.config.port)
    await asyncio.gather(*(s.serve() for s in servers))


def main() -> None:
    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        pass
