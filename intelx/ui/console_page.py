"""NiceGUI case console: folder tree, chat history and the active conversation."""

import logging
from collections.abc import Callable

from nicegui import events, ui

from intelx import __version__
from intelx.core.workspace import Workspace
from intelx.models.schemas import (
    Attachment,
    ConversationSnapshot,
    Message,
    NodeKind,
    Sender,
    TreeRow,
)

logger = logging.getLogger(__name__)

ACCEPTED_FILES = ".pdf,.docx,.txt"

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #F6F7F9; }

    .case-header { background: #496278; }
    .brand-accent { color: #496278; }

    .pane { background: white; border-right: 1px solid #e5e7eb; height: 100%; overflow-y: auto; }

    .tree-row:hover, .session-row:hover { background: #f9fafb; }
    .session-row.selected { background: #F1F5F9; box-shadow: inset 0 0 0 1px #e5e7eb; }

    .message-user { background: #E9F2FF; color: #1f2937; border-radius: 8px; }
    .message-assistant { color: #1f2937; border-radius: 8px; }

    .attachment-chip {
        background: #F8F9FB;
        border: 1px solid #e5e7eb;
        border-radius: 8px;
    }

    .typing-dot {
        width: 6px; height: 6px;
        background: #9ca3af;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.15s; }
    .typing-dot:nth-child(3) { animation-delay: 0.3s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-4px); }
    }

    .composer {
        background: white;
        border: 1px solid #d1d5db;
        border-radius: 16px;
        width: 420px;
        max-width: 80vw;
    }
</style>
"""


def upload_to_attachment(e: events.UploadEventArguments) -> Attachment:
    """Keep the metadata of an uploaded file; the content is never read."""
    file = e.file
    return Attachment(
        name=file.name,
        byte_size=file.size(),
        mime_type=file.content_type or "",
    )


def render_attachment_chip(attachment: Attachment) -> None:
    with ui.row().classes("attachment-chip items-center gap-2 px-2 py-1 no-wrap"):
        ui.icon("description").classes("text-[#1E3A8A] text-base")
        with ui.column().classes("gap-0 leading-tight"):
            ui.label(attachment.name).classes("text-xs font-medium truncate w-[100px]")
            ui.label(attachment.extension_label).classes("text-[10px] text-gray-500")


def render_message(msg: Message) -> None:
    is_user = msg.sender is Sender.USER
    align = "justify-end" if is_user else "justify-start"
    bubble = "message-user" if is_user else "message-assistant"

    with ui.row().classes(f"w-full {align}"):
        with ui.column().classes(f"max-w-[70%] gap-1 px-4 py-2 {bubble}"):
            if msg.text:
                if is_user:
                    ui.label(msg.text).classes("text-sm whitespace-pre-wrap")
                else:
                    ui.markdown(msg.text).classes("text-sm")
            if msg.attachments:
                with ui.row().classes("gap-2 mt-1"):
                    for attachment in msg.attachments:
                        render_attachment_chip(attachment)
            ui.label(msg.time_label).classes(
                f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
            )


def render_typing_indicator() -> None:
    with ui.row().classes("w-full justify-start"), ui.row().classes("gap-1 px-4 py-2"):
        for _ in range(3):
            ui.element("div").classes("typing-dot")


def render_tree_row(row: TreeRow, on_toggle: Callable[[tuple[int, ...]], None]) -> None:
    pad = 8 + row.depth * 16
    with ui.row().classes("tree-row w-full items-center gap-2 rounded-md no-wrap").style(
        f"padding-left: {pad}px; padding-top: 4px; padding-bottom: 4px"
    ):
        if row.expandable:
            ui.button(
                icon="expand_more" if row.expanded else "chevron_right",
                on_click=lambda path=row.path: on_toggle(path),
            ).props("flat round dense size=sm color=grey-8")
            ui.icon("folder").classes("text-amber-600 text-lg")
        else:
            ui.element("span").classes("w-6")
            ui.icon("description").classes("text-gray-500 text-lg")

        if row.kind is NodeKind.SECTION:
            css = "font-semibold text-gray-900"
        elif row.expandable:
            css = "text-gray-900"
        else:
            css = "text-gray-700"
        ui.label(row.label).classes(f"text-sm {css}")


@ui.page("/")
def console_page() -> None:
    """Main console page. Each browser client gets its own workspace."""
    ui.add_head_html(CUSTOM_CSS)
    workspace = Workspace()
    # View-only state; the core engines never see it.
    view = {"search": ""}

    input_field: ui.textarea
    send_btn: ui.button
    uploader: ui.upload

    # === Folder tree ===

    def toggle_node(path: tuple[int, ...]) -> None:
        if workspace.folders.toggle(path):
            folder_pane.refresh()

    @ui.refreshable
    def folder_pane() -> None:
        for row in workspace.folders.rows():
            render_tree_row(row, toggle_node)

    # === Chat history ===

    def new_chat() -> None:
        workspace.sessions.create_session()
        history_pane.refresh()

    def select_chat(session_id: str) -> None:
        if workspace.sessions.select_session(session_id):
            history_pane.refresh()

    def save_title(session_id: str, title: str) -> None:
        if workspace.sessions.editing_id != session_id:
            # Blur after Enter already saved it.
            return
        workspace.sessions.rename_session(session_id, title)
        history_pane.refresh()

    def start_rename(session_id: str) -> None:
        workspace.sessions.begin_rename(session_id)
        history_pane.refresh()

    def cancel_rename() -> None:
        workspace.sessions.cancel_rename()
        history_pane.refresh()

    def delete_chat(session_id: str) -> None:
        workspace.sessions.delete_session(session_id)
        history_pane.refresh()

    def set_search(e: events.ValueChangeEventArguments) -> None:
        view["search"] = e.value or ""
        history_pane.refresh()

    @ui.refreshable
    def history_pane() -> None:
        store = workspace.sessions
        for session in store.search(view["search"]):
            selected = "selected" if session.id == store.selected_id else ""
            with ui.row().classes(
                f"session-row {selected} group w-full items-center gap-2 rounded-md px-2 py-2 no-wrap"
            ):
                ui.icon("folder").classes("text-[#475569] bg-[#E2E8F0] rounded-md p-1")
                if session.id == store.editing_id:
                    title_input = ui.input(value=session.title).props("dense outlined autofocus")
                    title_input.classes("flex-grow text-sm")
                    title_input.on(
                        "keydown.enter",
                        lambda sid=session.id, field=title_input: save_title(sid, field.value),
                    )
                    title_input.on(
                        "blur",
                        lambda sid=session.id, field=title_input: save_title(sid, field.value),
                    )
                    title_input.on("keydown.escape", cancel_rename)
                    continue

                with ui.column().classes("min-w-0 flex-grow gap-0 cursor-pointer").on(
                    "click", lambda sid=session.id: select_chat(sid)
                ):
                    ui.label(session.title).classes("text-[13px] text-gray-800 truncate")
                    ui.label("Updated just now").classes("text-[11px] text-gray-400")
                with ui.button(icon="more_vert").props("flat round dense size=sm").classes(
                    "opacity-0 group-hover:opacity-100"
                ):
                    with ui.menu():
                        ui.menu_item(
                            "Rename", on_click=lambda sid=session.id: start_rename(sid)
                        )
                        ui.menu_item(
                            "Delete", on_click=lambda sid=session.id: delete_chat(sid)
                        ).classes("text-[#DE1A1A]")

    # === Conversation ===

    @ui.refreshable
    def messages_view() -> None:
        snapshot = workspace.conversation.snapshot()
        if not snapshot.messages:
            with ui.column().classes("w-full h-64 items-center justify-center"):
                with ui.row().classes("gap-0 text-3xl font-semibold text-gray-800"):
                    ui.label("Ask Intel")
                    ui.label("X").classes("brand-accent")
            return
        for msg in snapshot.messages:
            render_message(msg)
        if snapshot.response_pending:
            render_typing_indicator()

    @ui.refreshable
    def staged_view() -> None:
        staged = workspace.conversation.staged_attachments
        if not staged:
            return
        with ui.row().classes("gap-2 mb-2"):
            for index, attachment in enumerate(staged):
                with ui.element("div").classes("relative"):
                    render_attachment_chip(attachment)
                    ui.button(
                        icon="close",
                        on_click=lambda i=index: workspace.conversation.unstage_attachment(i),
                    ).props("flat round dense size=xs").classes("absolute -top-2 -right-2")

    def on_conversation_change(snapshot: ConversationSnapshot) -> None:
        messages_view.refresh()
        staged_view.refresh()
        send_btn.set_enabled(not snapshot.response_pending)

    def on_sessions_reset() -> None:
        input_field.value = ""

    workspace.conversation.subscribe(on_conversation_change)
    workspace.sessions.subscribe_reset(on_sessions_reset)

    def send_message() -> None:
        workspace.conversation.update_draft(input_field.value or "")
        if workspace.conversation.submit():
            input_field.value = ""

    def handle_upload(e: events.UploadEventArguments) -> None:
        workspace.conversation.stage_attachments([upload_to_attachment(e)])
        uploader.reset()

    def handle_draft(e: events.ValueChangeEventArguments) -> None:
        workspace.conversation.update_draft(e.value or "")

    def handle_disconnect() -> None:
        workspace.conversation.unsubscribe(on_conversation_change)
        workspace.conversation.reset()
        logger.debug("Client disconnected, conversation discarded")

    ui.context.client.on_disconnect(handle_disconnect)

    # === UI Layout ===
    with ui.row().classes("w-full case-header px-4 py-2 items-center justify-between"):
        with ui.row().classes("items-center gap-1 text-white"):
            ui.label("Case#").classes("font-semibold")
            ui.label(workspace.config.case_number)
        ui.label("Statement Intelligence").classes("text-sm text-white/80")

    with ui.element("div").classes("w-full grid gap-0").style(
        "grid-template-columns: 320px 300px 1fr; height: calc(100vh - 56px)"
    ):
        with ui.column().classes("pane p-3 gap-1"):
            folder_pane()

        with ui.column().classes("pane p-3 gap-2"):
            with ui.row().classes("gap-0 text-xl font-semibold"):
                ui.label("Intel")
                ui.label("X").classes("brand-accent")
            ui.button("New Chat", icon="add", on_click=new_chat).props(
                "unelevated no-caps"
            ).classes("w-full bg-[#0F172A] text-white")
            ui.input(placeholder="Search chats…", on_change=set_search).props(
                "dense outlined clearable"
            ).classes("w-full")
            ui.label("Chat History").classes("text-[11px] uppercase text-gray-400 mt-2")
            with ui.column().classes("w-full gap-1 flex-grow"):
                history_pane()
            ui.label(f"v{__version__} • Auto-saves titles").classes(
                "text-[11px] text-gray-400 border-t pt-2"
            )

        with ui.column().classes("h-full bg-[#F9FAFB] gap-0"):
            with ui.scroll_area().classes("flex-grow w-full"):
                with ui.column().classes("w-full px-8 py-6 gap-4"):
                    messages_view()

            with ui.column().classes("w-full items-center py-5"):
                with ui.column().classes("composer px-4 py-2 gap-1"):
                    staged_view()
                    with ui.row().classes("w-full items-center no-wrap gap-1"):
                        uploader = (
                            ui.upload(multiple=True, auto_upload=True, on_upload=handle_upload)
                            .props(f'accept="{ACCEPTED_FILES}" flat dense hide-upload-btn')
                            .classes("w-24")
                        )
                        input_field = (
                            ui.textarea(placeholder="Ask anything", on_change=handle_draft)
                            .props("autogrow borderless dense rows=1")
                            .classes("flex-grow text-sm")
                            .on("keydown.enter.prevent", send_message)
                        )
                        send_btn = ui.button(icon="send", on_click=send_message).props(
                            "flat round dense color=grey-7"
                        )


def main() -> None:
    ui.run(title="IntelX", port=8080, reload=False)


if __name__ == "__main__":
    main()
