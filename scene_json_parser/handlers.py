from __future__ import annotations

import logging
from typing import Optional

import gradio as gr

from .ai_client import AIModelType, GeminiClient
from .config import Settings
from .errors import AIRequestFailedError, NothingToExportError
from .exporting import write_text_file, write_zip_archive
from .formatting import context_preview, field_title
from .io_utils import read_text_content
from .session import SceneSession

logger = logging.getLogger(__name__)

AI_ERROR_TEXT = "Sorry, I encountered an error processing your request."


def status_text(session: SceneSession) -> str:
    if session.error:
        return session.error
    if not session.has_data:
        return ""
    return f"Successfully parsed. Found {len(session.keys)} unique fields."


def handle_parse(raw_text: str, session: Optional[SceneSession]):
    session = (session or SceneSession()).parse(raw_text)
    return session, status_text(session)


def handle_upload(file_obj, session: Optional[SceneSession]):
    """Load an uploaded .json file into the input box and parse it."""
    session = session or SceneSession()
    try:
        raw_text = read_text_content(file_obj)
    except (OSError, ValueError):
        logger.exception("Could not read uploaded file")
        return gr.update(), session, "Could not read the uploaded file."

    session, status = handle_parse(raw_text, session)
    return raw_text, session, status


def handle_clear(review_id: int = 0):
    """Reset input, parsed data, downloads and any open review panel."""
    return ("", SceneSession().clear(), "", None, None) + close_review(review_id)


def handle_toggle(name: str, session: Optional[SceneSession]):
    return (session or SceneSession()).toggle_field(name)


def handle_export_field(name: str, session: Optional[SceneSession], settings: Settings):
    if session is None or not session.has_data:
        return None
    filename, content = session.export_field(name)
    return write_text_file(filename, content, settings.export_dir)


def handle_export_all(session: Optional[SceneSession], settings: Settings):
    if session is None or not session.has_data:
        return None, "No data loaded."
    try:
        entries = session.export_selected_entries()
    except NothingToExportError as e:
        return None, e.message

    path = write_zip_archive(entries, settings.archive_name, settings.export_dir)
    return path, f"Exported {len(entries)} field(s) to {settings.archive_name}."


def open_review(name: str, session: Optional[SceneSession], review_id: int):
    """Show the review panel for one field. Each opening gets a new id."""
    content = session.format_field(name) if session is not None else ""
    return (
        gr.update(visible=True),
        f"### Gemini Intelligence: {field_title(name)}",
        context_preview(content),
        content,
        "",
        "",
        (review_id or 0) + 1,
    )


def close_review(review_id: int):
    return gr.update(visible=False), "", "", "", "", "", (review_id or 0) + 1


def update_generate_button(prompt: str, busy: bool = False):
    return gr.update(interactive=bool((prompt or "").strip()) and not busy)


def start_generation():
    return gr.update(interactive=False, value="Processing..."), True, ""


def finish_generation(prompt: str):
    return gr.update(interactive=bool((prompt or "").strip()), value="Generate"), False


def handle_generate(prompt: str, context: str, thinking_mode: bool, review_id: int, client: GeminiClient):
    """Run one AI request; returns (text, id of the review it belongs to)."""
    if not (prompt or "").strip():
        return "", review_id
    model_type = AIModelType.THINKING if thinking_mode else AIModelType.FAST
    try:
        return client.generate(prompt, context or "", model_type), review_id
    except AIRequestFailedError:
        return AI_ERROR_TEXT, review_id


def deliver_response(pending, review_id: int):
    """Show a finished response only if its review panel is still the open one."""
    if not pending:
        return gr.update()
    text, started_for = pending
    if started_for != review_id:
        logger.info("Dropping AI response for closed review %s", started_for)
        return gr.update()
    return text
