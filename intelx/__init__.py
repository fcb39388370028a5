"""IntelX Assistant Console - case workspace with an automated assistant.

Combines NiceGUI for the three-pane browser console, FastAPI for the
intent API, and Pydantic for the state model.

Components:
    - core: conversation, session and folder-tree state machines
    - api: HTTP endpoints exposing the console intents
    - ui: Web interface for the case workspace
    - models: Messages, attachments, sessions and folder nodes
"""

__version__ = "0.3.0"
