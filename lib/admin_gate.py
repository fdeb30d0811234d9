"""Email check that unlocks the question editor.

The comparison runs inside the Streamlit session and the authorised address
ships with the app, so it keeps casual visitors out of the editor but is not
an access-control boundary. Anything that needs real protection has to decide
authorisation and apply edits on a trusted server.
"""

from __future__ import annotations

import logging

from lib.settings import DEFAULT_ADMIN_EMAIL

logger = logging.getLogger(__name__)


def is_authorized_email(email: str, authorized: str = DEFAULT_ADMIN_EMAIL) -> bool:
    """Return ``True`` when ``email`` matches ``authorized`` ignoring case."""

    granted = bool(authorized) and (email or "").lower() == authorized.lower()
    logger.info("Admin gate %s", "granted" if granted else "denied")
    return granted
