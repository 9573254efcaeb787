import gradio as gr
from functools import partial

from scene_json_parser.ai_client import SUGGESTED_PROMPTS, GeminiClient
from scene_json_parser.config import load_settings
from scene_json_parser.formatting import field_title
from scene_json_parser.handlers import (
    close_review,
    deliver_response,
    finish_generation,
    handle_clear,
    handle_export_all,
    handle_export_field,
    handle_generate,
    handle_parse,
    handle_toggle,
    handle_upload,
    open_review,
    start_generation,
    update_generate_button,
)
from scene_json_parser.logging_config import configure_logging
from scene_json_parser.session import SceneSession

settings = load_settings()
configure_logging(settings.log_level)
gemini = GeminiClient(settings)

# Clipboard access happens in the browser; failures only reach the console.
COPY_JS = """
(text) => {
    navigator.clipboard.writeText(text || "").catch((err) => console.error("Failed to copy!", err));
}
"""

# --- UI Definition ---
with gr.Blocks(title="SceneJSON Pro") as demo:
    gr.Markdown("# SceneJSON Pro")
    gr.Markdown("Parser & AI Asset Manager. Paste a scene array, pick fields, export or analyze them.")

    # State
    session_state = gr.State(value=SceneSession())
    review_id_state = gr.State(value=0)
    review_context_state = gr.State(value="")
    pending_response_state = gr.State()
    generating_state = gr.State(value=False)

    with gr.Row():
        # Left Panel: Input & Field Filter
        with gr.Column(scale=4):
            gr.Markdown("### JSON Input")
            json_input = gr.Textbox(
                label="Scene JSON",
                placeholder="Paste your Scene JSON array here...",
                lines=14,
                max_lines=30,
            )
            file_input = gr.File(label="...or upload a JSON file", file_types=[".json"])
            with gr.Row():
                parse_btn = gr.Button("Parse Data", variant="primary")
                clear_btn = gr.Button("Clear", variant="stop")
            status_msg = gr.Textbox(label="Status", interactive=False)

            gr.Markdown("### Field Filter")

            @gr.render(inputs=[session_state])
            def render_filter(session):
                if session is None or not session.has_data:
                    gr.Markdown("No data parsed yet.")
                    return

                counts = session.field_counts()
                for key in session.keys:
                    cb = gr.Checkbox(label=f"{key} ({counts[key]})", value=key in session.selected)
                    cb.input(fn=partial(handle_toggle, key), inputs=[session_state], outputs=[session_state])

        # Right Panel: Output
        with gr.Column(scale=8):
            with gr.Row():
                gr.Markdown("### Output")
                export_all_btn = gr.Button("Download All (ZIP)", variant="primary")
            download_output = gr.File(label="Download")

            # Review panel
            with gr.Group(visible=False) as review_group:
                review_title = gr.Markdown()
                gr.Markdown("Analyze and transform your content.")
                review_preview = gr.Textbox(label="Context Preview (First 200 chars)", interactive=False, lines=2)
                prompt_box = gr.Textbox(
                    label="Your Prompt",
                    placeholder="Ask Gemini to analyze, rewrite, or summarize this data...",
                    lines=3,
                )
                with gr.Row():
                    suggestion_btns = [gr.Button(p, size="sm") for p in SUGGESTED_PROMPTS]
                thinking_mode = gr.Checkbox(
                    label="Thinking Mode",
                    info="Uses the thinking model with extended reasoning for complex tasks.",
                    value=False,
                )
                response_md = gr.Markdown(label="Gemini Response")
                response_copy_btn = gr.Button("Copy Response", size="sm")
                with gr.Row():
                    close_btn = gr.Button("Close")
                    generate_btn = gr.Button("Generate", variant="primary", interactive=False)

            @gr.render(inputs=[session_state])
            def render_fields(session):
                if session is None or not session.has_data:
                    gr.Markdown("No data parsed yet. Paste JSON on the left to get started.")
                    return

                selected = session.selected_keys
                if not selected:
                    gr.Markdown("Select fields from the left to view content.")
                    return

                for key in selected:
                    content = session.format_field(key)
                    with gr.Group():
                        gr.Markdown(f"#### {field_title(key)}")
                        content_box = gr.Textbox(
                            value=content,
                            show_label=False,
                            interactive=False,
                            lines=6,
                            max_lines=16,
                        )
                        with gr.Row():
                            copy_btn = gr.Button("Copy", size="sm")
                            txt_btn = gr.Button("Download TXT", size="sm")
                            ai_btn = gr.Button("AI Analysis", size="sm", variant="secondary")

                    copy_btn.click(fn=None, inputs=[content_box], js=COPY_JS)
                    txt_btn.click(
                        fn=partial(handle_export_field, key, settings=settings),
                        inputs=[session_state],
                        outputs=[download_output],
                    )
                    ai_btn.click(
                        fn=partial(open_review, key),
                        inputs=[session_state, review_id_state],
                        outputs=[
                            review_group,
                            review_title,
                            review_preview,
                            review_context_state,
                            prompt_box,
                            response_md,
                            review_id_state,
                        ],
                    )

    parse_btn.click(
        fn=handle_parse,
        inputs=[json_input, session_state],
        outputs=[session_state, status_msg],
    )

    file_input.upload(
        fn=handle_upload,
        inputs=[file_input, session_state],
        outputs=[json_input, session_state, status_msg],
    )

    clear_btn.click(
        fn=handle_clear,
        inputs=[review_id_state],
        outputs=[
            json_input,
            session_state,
            status_msg,
            download_output,
            file_input,
            review_group,
            review_title,
            review_preview,
            review_context_state,
            prompt_box,
            response_md,
            review_id_state,
        ],
    )

    export_all_btn.click(
        fn=partial(handle_export_all, settings=settings),
        inputs=[session_state],
        outputs=[download_output, status_msg],
    )

    for btn, text in zip(suggestion_btns, SUGGESTED_PROMPTS):
        btn.click(fn=partial(lambda t: t, text), inputs=[], outputs=[prompt_box])

    prompt_box.change(fn=update_generate_button, inputs=[prompt_box, generating_state], outputs=[generate_btn])

    # One request in flight per review: the button stays disabled until it finishes.
    generate_btn.click(
        fn=start_generation,
        inputs=[],
        outputs=[generate_btn, generating_state, response_md],
    ).then(
        fn=partial(handle_generate, client=gemini),
        inputs=[prompt_box, review_context_state, thinking_mode, review_id_state],
        outputs=[pending_response_state],
    ).then(
        fn=deliver_response,
        inputs=[pending_response_state, review_id_state],
        outputs=[response_md],
    ).then(
        fn=finish_generation,
        inputs=[prompt_box],
        outputs=[generate_btn, generating_state],
    )

    response_copy_btn.click(fn=None, inputs=[response_md], js=COPY_JS)

    close_btn.click(
        fn=close_review,
        inputs=[review_id_state],
        outputs=[
            review_group,
            review_title,
            review_preview,
            review_context_state,
            prompt_box,
            response_md,
            review_id_state,
        ],
    )

if __name__ == "__main__":
    demo.launch()
