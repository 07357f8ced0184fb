"""Helpdesk - account registration, session tokens and support records over HTTP.

This package provides HelpdeskService, a FastAPI application backed by MongoDB:

- Account registration with bcrypt-hashed passwords
- Login issuing 24h HS256 session tokens, and token verification
- Problem reports with normalized urgency levels
- Reviews listed newest first

Example:
    ```python
    from helpdesk import HelpdeskService, load_settings

    HelpdeskService(load_settings()).launch()
    ```

    Via command line:
    ```bash
    JWT_SECRET=... MONGO_URI=mongodb://localhost:27017 python -m helpdesk
    ```
"""

from .core import HelpdeskSettings, load_settings
from .db import HelpdeskDB
from .service import HelpdeskService

__all__ = [
    "HelpdeskDB",
    "HelpdeskService",
    "HelpdeskSettings",
    "load_settings",
]
