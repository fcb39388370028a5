"""Console server entry point.

Serves the intent API and the NiceGUI console from a single uvicorn
process. Settings come from the environment, with .env loaded first.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def bind_address() -> tuple[str, int]:
    """Host and port to listen on, from HOST and PORT."""
    return os.getenv("HOST", "0.0.0.0"), int(os.getenv("PORT", "8000"))


def main() -> None:
    """Mount the console page on the API app and serve both."""
    import uvicorn
    from nicegui import ui

    from intelx.api.app import create_app
    from intelx.ui.console_page import console_page  # noqa: F401 - Registers the page

    app = create_app()
    ui.run_with(
        app,
        title="IntelX",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "intelx-console-secret"),
    )

    host, port = bind_address()
    logger.info(f"IntelX console on http://{host}:{port}/ (API docs at /docs)")
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
