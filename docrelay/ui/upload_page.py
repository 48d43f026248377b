"""NiceGUI page for uploading a document and asking questions about it."""

from nicegui import events, ui

from docrelay.config import get_config
from docrelay.models.schemas import Answer, AnswerError
from docrelay.ui.relay_client import FormState, RelayClient, receive_file

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    .app-container {
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
    }

    .header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); }

    .submit-btn { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%) !important; }
</style>
"""


@ui.page("/")
def upload_page() -> None:
    """Main document Q&A page."""
    ui.add_head_html(CUSTOM_CSS)
    config = get_config()
    relay = RelayClient(config.relay_url)
    state = FormState()
    dark = ui.dark_mode()

    query_field: ui.textarea

    async def handle_file(e: events.UploadEventArguments) -> None:
        await receive_file(state, e)
        render_answer.refresh()

    async def submit_upload() -> None:
        await relay.upload_document(state)
        render_answer.refresh()

    async def submit_query() -> None:
        await relay.ask_query(state, query_field.value or "")
        render_answer.refresh()

    @ui.refreshable
    def render_answer() -> None:
        answer = state.answer
        if answer is None:
            return

        with ui.card().classes("w-full"):
            if isinstance(answer, AnswerError):
                ui.label(f"Error: {answer.error}").classes("text-red-500 font-semibold")
                if answer.raw_output:
                    ui.label(f"Raw Output: {answer.raw_output}").classes("text-red-500")
            elif isinstance(answer, Answer):
                with ui.row().classes("gap-2"):
                    ui.label("Decision:").classes("font-bold")
                    ui.label(answer.decision or "").classes("font-semibold")
                if answer.amount is not None:
                    with ui.row().classes("gap-2"):
                        ui.label("Amount:").classes("font-bold")
                        ui.label(str(answer.amount))
                if answer.justification and answer.justification.clauses:
                    ui.label("Justification:").classes("font-bold")
                    with ui.column().classes("pl-5 gap-2"):
                        for clause in answer.justification.clauses:
                            ui.label(f'Text: "{clause.text}"').classes("font-medium")
                            ui.label(f"Location: {clause.location}").classes(
                                "text-sm text-gray-500"
                            )
            else:
                ui.label(str(answer.content)).classes("whitespace-pre-wrap")

    # === UI Layout ===
    with ui.column().classes("w-full max-w-3xl mx-auto p-4 md:p-8 gap-4 app-container"):
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("description").classes("text-white text-3xl")
                ui.label("Document Q&A").classes("text-lg font-semibold text-white")
            ui.button(icon="dark_mode", on_click=dark.toggle).props("flat round color=white")

        # Upload
        ui.label("Upload a document").classes("text-base font-semibold")
        ui.upload(on_upload=handle_file, auto_upload=True, max_files=1).props(
            "flat bordered"
        ).classes("w-full")
        ui.button("Upload Document", on_click=submit_upload).classes(
            "submit-btn text-white"
        ).bind_enabled_from(state, "busy", backward=lambda busy: not busy)

        # Query
        ui.label("Ask a question").classes("text-base font-semibold")
        query_field = (
            ui.textarea(placeholder="e.g. Is knee surgery covered for a 46-year-old?")
            .props("autogrow outlined")
            .classes("w-full")
        )
        ui.button("Ask", on_click=submit_query).classes(
            "submit-btn text-white"
        ).bind_enabled_from(state, "busy", backward=lambda busy: not busy)

        ui.label().bind_text_from(state.status, "text").classes("text-sm text-gray-600")
        ui.spinner().bind_visibility_from(state, "busy")

        render_answer()


def main() -> None:
    config = get_config()
    ui.run(title="Document Q&A", port=config.ui_port, reload=False)


if __name__ == "__main__":
    main()
