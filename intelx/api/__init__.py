"""FastAPI endpoints for the assistant console.

Exposes every presentation intent over HTTP so the console state can be
driven without the browser UI.

Endpoints:
    - GET /health: Service health status
    - /sessions: Session catalog (create, select, rename, delete, search)
    - /conversation: Composer, attachments, submit and reset
    - /folders: Case file tree rows and toggling
"""

from intelx.api.app import create_app

__all__ = ["create_app"]
