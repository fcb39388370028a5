"""NiceGUI interface - thin visualization layer over the console state.

Renders the three-pane case workspace with real-time updates.

Responsibilities:
    - Case file tree with expand/collapse chevrons
    - Chat history with new, rename, delete and search
    - Conversation view with typing indicator and attachment chips
    - File chooser and drag-and-drop uploads into the composer

Contains no state-transition logic. Hover, menu and search state stay in
the view; everything else is read from the core engines.
"""
