# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Server entry point.

Run with ``gym-enrollment`` or ``uvicorn src.main:app``.
"""

import uvicorn

from src.api.app import create_app
from src.core.config import get_settings

app = create_app()


def run() -> None:
    """Serve the API with uvicorn using API_* settings."""
    settings = get_settings()
    uvicorn.run(
        "src.main:app",
        host=settings.api.host,
        port=settings.api.port,
        workers=None if settings.api.reload else settings.api.workers,
        reload=settings.api.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
