from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

import gradio as gr

from ..config_actions import SetOffset, SetPageSize, SetTextPath
from ..display import BufferedSink
from ..session import ReaderSession
from ..stores import JsonSettings, JsonStateStore
from ..utils.io import DATA_DIR, SETTINGS_FILE, STATE_FILE, ensure_dirs

PanelOutputs = Tuple[str, str, str]


def _number_text(raw) -> str:
    # gr.Number hands back floats even with precision=0
    if raw is None:
        return ""
    if isinstance(raw, float) and raw.is_integer():
        return str(int(raw))
    return str(raw)


class ReaderPanel:
    """Glue between gradio events and a reader session.

    Every handler runs one command and returns the page text, progress and
    status line for the three output boxes.
    """

    def __init__(self, session: ReaderSession, sink: BufferedSink) -> None:
        self.session = session
        self.sink = sink

    def _outputs(self) -> PanelOutputs:
        if not self.sink.visible:
            return "", "", self.sink.status or "Hidden"
        return self.sink.page_text, self.sink.progress_text, self.sink.status

    def _run(self, command) -> PanelOutputs:
        self.sink.status = ""
        command()
        return self._outputs()

    def toggle(self) -> PanelOutputs:
        return self._run(self.session.toggle)

    def forward(self) -> PanelOutputs:
        return self._run(self.session.page_forward)

    def backward(self) -> PanelOutputs:
        return self._run(self.session.page_backward)

    def hide(self) -> PanelOutputs:
        return self._run(self.session.hide)

    def quit(self) -> PanelOutputs:
        return self._run(self.session.quit)

    def clear(self) -> PanelOutputs:
        return self._run(self.session.clear_all_positions)

    def set_path(self, raw: str) -> PanelOutputs:
        return self._run(lambda: self.session.edit_settings(SetTextPath(), raw))

    def set_page_size(self, raw) -> PanelOutputs:
        return self._run(lambda: self.session.edit_settings(SetPageSize(), _number_text(raw)))

    def set_offset(self, raw) -> PanelOutputs:
        return self._run(lambda: self.session.edit_settings(SetOffset(), _number_text(raw)))


def build_panel(data_dir: Path = DATA_DIR, workspace: Optional[Path] = None) -> ReaderPanel:
    ensure_dirs(data_dir)
    sink = BufferedSink()
    session = ReaderSession(
        settings=JsonSettings(data_dir / SETTINGS_FILE),
        store=JsonStateStore(data_dir / STATE_FILE),
        sink=sink,
        base_dir=workspace if workspace is not None else Path.cwd(),
    )
    return ReaderPanel(session, sink)


def build_ui(data_dir: Path = DATA_DIR, workspace: Optional[Path] = None) -> gr.Blocks:
    panel = build_panel(data_dir, workspace)
    logging.info("Reader panel using data dir %s", data_dir)

    with gr.Blocks(title="sreader") as demo:
        gr.Markdown("# 📖 sreader")
        with gr.Row():
            page_box = gr.Textbox(label="Page", interactive=False, lines=1, scale=5)
            progress_box = gr.Textbox(label="Progress", interactive=False, lines=1, scale=1)
        status_box = gr.Textbox(label="Status", interactive=False, lines=1)

        with gr.Row():
            back_btn = gr.Button("◀ Previous")
            toggle_btn = gr.Button("Show / Hide", variant="primary")
            next_btn = gr.Button("Next ▶")
        with gr.Row():
            hide_btn = gr.Button("Hide")
            quit_btn = gr.Button("Quit")
            clear_btn = gr.Button("🗑️ Clear all positions", variant="stop")

        with gr.Accordion("⚙️ Settings", open=False):
            with gr.Row():
                path_input = gr.Textbox(label="Text path", placeholder="book.txt or /abs/path/book.txt", scale=4)
                path_btn = gr.Button("Set path", scale=1)
            with gr.Row():
                size_input = gr.Number(label="Page size", value=20, precision=0, scale=4)
                size_btn = gr.Button("Set page size", scale=1)
            with gr.Row():
                offset_input = gr.Number(label="Offset", value=0, precision=0, scale=4)
                offset_btn = gr.Button("Jump", scale=1)

        outputs = [page_box, progress_box, status_box]
        toggle_btn.click(fn=panel.toggle, outputs=outputs)
        next_btn.click(fn=panel.forward, outputs=outputs)
        back_btn.click(fn=panel.backward, outputs=outputs)
        hide_btn.click(fn=panel.hide, outputs=outputs)
        quit_btn.click(fn=panel.quit, outputs=outputs)
        clear_btn.click(fn=panel.clear, outputs=outputs)
        path_btn.click(fn=panel.set_path, inputs=[path_input], outputs=outputs)
        size_btn.click(fn=panel.set_page_size, inputs=[size_input], outputs=outputs)
        offset_btn.click(fn=panel.set_offset, inputs=[offset_input], outputs=outputs)

    return demo


if __name__ == "__main__":
    demo = build_ui()
    demo.launch()
