"""
Size Advisor Gradio - local UI over a single in-process SizingApp.

Features:
- Language switch (uk / en / ru), chart category selection
- Photo upload + height / optional weight, AI size recommendation
- Reference table with the recommended rows highlighted
- Chart editor tab: rename, edit headers and cells, add/delete categories

Usage:
    OPENAI_API_KEY=... PYTHONPATH=src python scripts/size_advisor_gradio.py

    Open http://localhost:7863 in your browser
"""

import os
import sys
from typing import Any, List, Tuple

import gradio as gr
from dotenv import load_dotenv

# Make sure src/ is importable when run from the repo root
_SRC = os.path.join(os.path.dirname(__file__), "..", "src")
if _SRC not in sys.path:
    sys.path.insert(0, _SRC)

load_dotenv(os.path.join(os.path.dirname(__file__), "..", ".env"))

from analysis.intake import ImagePayload  # noqa: E402
from config.constants import LANGUAGE_NAMES, SUPPORTED_LANGUAGES  # noqa: E402
from config.settings import get_settings  # noqa: E402
from core.errors import (  # noqa: E402
    AnalysisError,
    ChartValidationError,
    ConfigurationError,
    EditorStateError,
    InvalidMeasurementError,
)
from core.logging import configure_logging  # noqa: E402
from services.sizing_app import SizingApp  # noqa: E402

PORT = int(os.getenv("GRADIO_PORT", "7863"))

configure_logging(json_logs=False, log_level="INFO")

# One app per process; the API serves one per session instead
sizing_app = SizingApp(language=get_settings().default_language)


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------

def _chart_choices() -> List[Tuple[str, str]]:
    return [(c["name"], c["id"]) for c in sizing_app.list_charts()]


def _table_markdown() -> str:
    chart = sizing_app.active_chart
    t = sizing_app.translations
    headers = chart.headers
    if not headers:
        return "*empty*"

    marked = set(sizing_app.highlighted_rows())
    lines = [
        f"**{t['using_table']}:** {sizing_app.chart_display_name(chart)} ({len(chart.data)} {t['rows']})",
        "",
        "| " + " | ".join(headers) + " |",
        "|" + "---|" * len(headers),
    ]
    for i, row in enumerate(chart.data):
        cells = [row.get(h, "") for h in headers]
        if i in marked:
            cells = [f"**{c}**" if c else c for c in cells]
            cells[0] = f"▶ {cells[0]}"
        lines.append("| " + " | ".join(cells) + " |")
    return "\n".join(lines)


def _result_markdown() -> str:
    result = sizing_app.result
    if result is None:
        return ""
    t = sizing_app.translations
    return (
        f"## {t['rec_title']}: {result.recommendedSize}\n\n"
        f"**{t['confidence']}:** {result.confidence:.0f}%\n\n"
        f"### {t['ai_estimates']}\n"
        f"- {t['chest']}: {result.estimatedChest:g} cm\n"
        f"- {t['waist']}: {result.estimatedWaist:g} cm\n"
        f"- {t['hips']}: {result.estimatedHips:g} cm\n\n"
        f"{result.reasoning}"
    )


def _error_markdown(message: str = None) -> str:
    message = message or sizing_app.error
    return f"⚠️ {message}" if message else ""


def _main_view(message: str = None) -> tuple:
    t = sizing_app.translations
    return (
        gr.update(choices=_chart_choices(), value=sizing_app.active_chart_id, label=t["select_category"]),
        _table_markdown(),
        _result_markdown(),
        _error_markdown(message),
        gr.update(value=t["analyze_btn"]),
    )


def _editor_view() -> tuple:
    editor = sizing_app.editor
    if not editor.is_editing:
        return (
            gr.update(choices=[], value=None),
            "",
            "",
            gr.update(value=[]),
            "",
        )
    return (
        gr.update(
            choices=[(editor.display_name(c), c.id) for c in editor.charts],
            value=editor.active_id,
        ),
        editor.name,
        ", ".join(editor.grid.headers),
        gr.update(value=[list(r) for r in editor.grid.rows] or [[""] * editor.grid.width]),
        _error_markdown(editor.last_error) if editor.last_error else "",
    )


def _apply_form(name: str, headers_text: str, rows: Any) -> None:
    """Push the editor form back into the session before any other action."""
    headers = [h.strip() for h in (headers_text or "").split(",")]
    if hasattr(rows, "values"):
        rows = rows.values.tolist()
    rows = [["" if c is None else str(c) for c in row] for row in (rows or [])]
    sizing_app.editor.replace_grid(headers, rows, name=name)


# ---------------------------------------------------------------------------
# Main tab handlers
# ---------------------------------------------------------------------------

def change_language(language: str) -> tuple:
    sizing_app.set_language(language)
    return _main_view()


def change_chart(chart_id: str) -> tuple:
    if chart_id:
        sizing_app.select_active_chart(chart_id)
    return _main_view()


def analyze(image, height: str, weight: str) -> tuple:
    if image is None:
        return _main_view()

    payload = ImagePayload.from_pil(image)
    try:
        sizing_app.submit(height=str(height or ""), weight=str(weight or ""), image=payload)
    except InvalidMeasurementError as e:
        return _main_view(str(e))
    except ConfigurationError as e:
        return _main_view(str(e))
    except AnalysisError:
        return _main_view()
    return _main_view()


def reset() -> tuple:
    sizing_app.reset()
    return _main_view()


# ---------------------------------------------------------------------------
# Editor tab handlers
# ---------------------------------------------------------------------------

def open_editor() -> tuple:
    if not sizing_app.editor.is_editing:
        sizing_app.open_editor()
    return _editor_view()


def _edit(action, name: str, headers_text: str, rows: Any) -> tuple:
    try:
        _apply_form(name, headers_text, rows)
        action()
    except ChartValidationError as e:
        return _editor_view()[:-1] + (_error_markdown(sizing_app.editor.last_error or str(e)),)
    except (EditorStateError, IndexError) as e:
        return _editor_view()[:-1] + (_error_markdown(str(e)),)
    return _editor_view()


def editor_select(chart_id: str, name: str, headers_text: str, rows: Any) -> tuple:
    if not chart_id or chart_id == sizing_app.editor.active_id:
        return _editor_view()
    return _edit(lambda: sizing_app.editor.select_chart(chart_id), name, headers_text, rows)


def editor_add_category(name: str, headers_text: str, rows: Any) -> tuple:
    return _edit(sizing_app.editor.add_category, name, headers_text, rows)


def editor_delete_category(name: str, headers_text: str, rows: Any) -> tuple:
    active_id = sizing_app.editor.active_id
    return _edit(lambda: sizing_app.editor.delete_category(active_id), name, headers_text, rows)


def editor_add_row(name: str, headers_text: str, rows: Any) -> tuple:
    return _edit(sizing_app.editor.add_row, name, headers_text, rows)


def editor_add_column(name: str, headers_text: str, rows: Any) -> tuple:
    return _edit(sizing_app.editor.add_column, name, headers_text, rows)


def editor_save(name: str, headers_text: str, rows: Any) -> tuple:
    return _edit(sizing_app.save_editor, name, headers_text, rows) + _main_view()


def editor_cancel() -> tuple:
    if sizing_app.editor.is_editing:
        sizing_app.cancel_editor()
    return _editor_view() + _main_view()


# ---------------------------------------------------------------------------
# UI
# ---------------------------------------------------------------------------

_t = sizing_app.translations

with gr.Blocks(title="Size Advisor") as demo:
    gr.Markdown(f"# {_t['app_title']}")
    gr.Markdown(f"*{_t['app_subtitle']}*")

    language = gr.Dropdown(
        choices=[(LANGUAGE_NAMES[code], code) for code in SUPPORTED_LANGUAGES],
        value=sizing_app.language,
        label="Language",
    )

    with gr.Tab("Advisor"):
        with gr.Row():
            # Left: form
            with gr.Column(scale=1):
                chart_select = gr.Dropdown(
                    choices=_chart_choices(),
                    value=sizing_app.active_chart_id,
                    label=_t["select_category"],
                )
                photo = gr.Image(type="pil", label=_t["photo_label"], height=320)
                height_input = gr.Textbox(label=_t["height_label"], placeholder="175")
                weight_input = gr.Textbox(label=_t["weight_label"], placeholder="70")
                with gr.Row():
                    analyze_btn = gr.Button(_t["analyze_btn"], variant="primary")
                    reset_btn = gr.Button(_t["try_again"], variant="secondary")
                error_box = gr.Markdown("")
                gr.Markdown(f"*{_t['privacy_note']}*")

            # Right: result + table
            with gr.Column(scale=2):
                result_box = gr.Markdown("")
                table_box = gr.Markdown(_table_markdown())

    with gr.Tab("Editor"):
        gr.Markdown(f"### {_t['editor_title']}")
        open_btn = gr.Button("Open editor", variant="primary")
        with gr.Row():
            with gr.Column(scale=1):
                editor_charts = gr.Radio(choices=[], label=_t["your_categories"])
                add_cat_btn = gr.Button(_t["add_table"])
                delete_cat_btn = gr.Button("Delete category", variant="stop")
            with gr.Column(scale=3):
                editor_name = gr.Textbox(label=_t["category_name_placeholder"])
                editor_headers = gr.Textbox(label="Columns (comma separated)")
                editor_rows = gr.Dataframe(type="array", interactive=True, label="")
                with gr.Row():
                    add_row_btn = gr.Button(_t["add_row"])
                    add_col_btn = gr.Button(_t["add_column"])
                editor_error = gr.Markdown("")
                with gr.Row():
                    save_btn = gr.Button(_t["save"], variant="primary")
                    cancel_btn = gr.Button(_t["cancel"], variant="secondary")

    # Event handlers
    main_outputs = [chart_select, table_box, result_box, error_box, analyze_btn]
    editor_outputs = [editor_charts, editor_name, editor_headers, editor_rows, editor_error]
    form_inputs = [editor_name, editor_headers, editor_rows]

    language.change(fn=change_language, inputs=[language], outputs=main_outputs)
    chart_select.change(fn=change_chart, inputs=[chart_select], outputs=main_outputs)
    analyze_btn.click(
        fn=analyze,
        inputs=[photo, height_input, weight_input],
        outputs=main_outputs,
        concurrency_limit=1,
    )
    reset_btn.click(fn=reset, outputs=main_outputs)

    open_btn.click(fn=open_editor, outputs=editor_outputs)
    editor_charts.input(fn=editor_select, inputs=[editor_charts] + form_inputs, outputs=editor_outputs)
    add_cat_btn.click(fn=editor_add_category, inputs=form_inputs, outputs=editor_outputs)
    delete_cat_btn.click(fn=editor_delete_category, inputs=form_inputs, outputs=editor_outputs)
    add_row_btn.click(fn=editor_add_row, inputs=form_inputs, outputs=editor_outputs)
    add_col_btn.click(fn=editor_add_column, inputs=form_inputs, outputs=editor_outputs)
    save_btn.click(fn=editor_save, inputs=form_inputs, outputs=editor_outputs + main_outputs)
    cancel_btn.click(fn=editor_cancel, outputs=editor_outputs + main_outputs)


if __name__ == "__main__":
    print(f"Starting Size Advisor UI on http://localhost:{PORT}")
    demo.launch(server_name="0.0.0.0", server_port=PORT, share=False)
