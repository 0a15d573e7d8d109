from __future__ import annotations
import tkinter as tk
from tkinter import ttk
from typing import Optional

from ..logic.replay_engine import ReplayEngine
from ..logic.signature_service import SignatureService
from ..models.stroke_record import StrokeRecord
from .signature_capture_dialog import SignatureCaptureDialog
from .tk_surface import TkCanvasSurface, TkFrameScheduler


class SignatureView(ttk.Frame):
    """
    Shows a stored signature and replays it:
      • "Sign…" opens the capture dialog and stores the result under the token
      • "Replay" animates the strokes (at most the configured replay duration)
      • a missing signature leaves the canvas blank and disables Replay
    """

    def __init__(self, parent, *, service: SignatureService, token: str, **kwargs):
        super().__init__(parent, **kwargs)
        self._service = service
        self._token = token
        self._record: Optional[StrokeRecord] = None
        self._make_ui()
        self.load()

    # ------------------------------------------------------------------ UI
    def _make_ui(self) -> None:
        cfg = self._service.config
        self.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)

        self.canvas = tk.Canvas(self, bg="white", height=160, highlightthickness=1,
                                highlightbackground="#888")
        self.canvas.grid(row=0, column=0, sticky="nsew", padx=12, pady=(10, 4))
        self._surface = TkCanvasSurface(self.canvas)
        self._engine = ReplayEngine(
            self._surface,
            TkFrameScheduler(self.canvas, interval_ms=cfg.frame_interval_ms),
            max_duration_ms=cfg.max_replay_ms,
            fit_to_surface=True,
            padding=cfg.fit_padding,
        )
        self._engine.add_finished_listener(lambda completed: self._refresh_buttons())

        row = ttk.Frame(self)
        row.grid(row=1, column=0, sticky="e", padx=12, pady=(0, 10))
        ttk.Button(row, text="Sign…", command=self._capture).pack(side="left")
        self._replay_btn = ttk.Button(row, text="Replay", command=self._replay)
        self._replay_btn.pack(side="left", padx=(6, 0))

        self.bind("<Destroy>", self._on_destroy, add="+")

    def _refresh_buttons(self) -> None:
        playable = self._record is not None and not self._record.is_empty
        busy = self._engine.is_playing
        self._replay_btn.state(["!disabled"] if playable and not busy else ["disabled"])

    # ------------------------------------------------------------------ actions
    def load(self) -> None:
        """(Re)load the stored record for the token and show it statically."""
        self._engine.stop()
        self._record = self._service.fetch(self._token)
        self._engine.render_static(self._record)
        self._refresh_buttons()

    def _capture(self) -> None:
        dlg = SignatureCaptureDialog(self, service=self._service, token=self._token)
        self.wait_window(dlg)
        if dlg.result is not None:
            self._record = dlg.result
            self._engine.stop()
            self._engine.render_static(self._record)
        self._refresh_buttons()

    def _replay(self) -> None:
        self._engine.play(self._record)
        self._refresh_buttons()

    def _on_destroy(self, event) -> None:
        if event.widget is self:
            self._engine.teardown()
