# signature/gui/signature_capture_dialog.py
from __future__ import annotations
import tkinter as tk
from tkinter import ttk, messagebox, colorchooser
from typing import Optional

from ..exceptions.errors import SignatureMissingError
from ..logic.capture_engine import CaptureEngine
from ..logic.signature_service import SignatureService
from ..models.stroke_record import StrokeRecord
from .tk_surface import TkCanvasSurface, bind_pointer_events


class SignatureCaptureDialog(tk.Toplevel):
    """
    Signature capture on a resizable Tk canvas.

    - Ink is stored as timestamped strokes (replayable), not as an image.
    - "Clear" asks for confirmation; cleared strokes cannot be recovered.
    - "Save" submits the record under ``token`` via the service and keeps it in
      ``self.result``; nothing signed shows a validation message instead.
    """
    CANVAS_W = 800
    CANVAS_H = 220

    def __init__(self, parent: tk.Misc, *, service: SignatureService, token: str) -> None:
        super().__init__(parent)
        self.title("Create Signature")
        self.transient(parent)
        self.grab_set()
        self.minsize(320, 160)

        self._service = service
        self._token = token
        self.result: Optional[StrokeRecord] = None

        cfg = service.config
        self.columnconfigure(0, weight=1)
        self.rowconfigure(1, weight=1)

        # Toolbar
        bar = ttk.Frame(self)
        bar.grid(row=0, column=0, sticky="ew", padx=10, pady=(10, 4))
        ttk.Label(bar, text="Stroke width").pack(side="left")
        self.stroke_var = tk.DoubleVar(value=cfg.stroke_width)
        ttk.Scale(bar, from_=1, to=10, variable=self.stroke_var, orient="horizontal", length=160,
                  command=self._on_width).pack(side="left", padx=(6, 12))
        self._color_btn = ttk.Button(bar, text="Color…", command=self._choose_color)
        self._color_btn.pack(side="left")
        ttk.Button(bar, text="Clear", command=self._clear).pack(side="left", padx=(6, 0))

        # Canvas
        self.canvas = tk.Canvas(
            self, width=self.CANVAS_W, height=self.CANVAS_H, bg="white",
            highlightthickness=1, highlightbackground="#888", cursor="crosshair"
        )
        self.canvas.grid(row=1, column=0, sticky="nsew", padx=10, pady=4)
        self._surface = TkCanvasSurface(self.canvas)
        self._engine = CaptureEngine(self._surface, color=cfg.stroke_color, width=cfg.stroke_width)
        self._unbind = bind_pointer_events(self._surface, self._engine)
        self._engine.add_change_listener(self._refresh_buttons)

        # Footer
        btns = ttk.Frame(self)
        btns.grid(row=2, column=0, sticky="e", padx=10, pady=(4, 10))
        ttk.Button(btns, text="Cancel", command=self._cancel).pack(side="right", padx=(6, 0))
        self._save_btn = ttk.Button(btns, text="Save", command=self._save)
        self._save_btn.pack(side="right")
        self._refresh_buttons()

        self.protocol("WM_DELETE_WINDOW", self._cancel)
        self.bind("<Escape>", lambda e: self._cancel())

    @property
    def engine(self) -> CaptureEngine:
        return self._engine

    # Toolbar handlers
    def _on_width(self, _value=None):
        self._engine.set_width(max(1.0, float(self.stroke_var.get())))

    def _choose_color(self):
        _, hexcolor = colorchooser.askcolor(color=self._engine.color, parent=self)
        if hexcolor:
            self._engine.set_color(hexcolor)

    def _refresh_buttons(self):
        self._save_btn.state(["!disabled"] if self._engine.has_signature else ["disabled"])

    # Actions
    def _clear(self):
        if not self._engine.has_signature:
            return
        if messagebox.askyesno(title="Clear signature?",
                               message="Discard the current signature?", parent=self):
            self._engine.reset()

    def _cancel(self):
        self._close()

    def _save(self):
        record = self._engine.get_record()
        try:
            self._service.submit(self._token, record)
        except SignatureMissingError as ex:
            messagebox.showwarning(title="Signature", message=str(ex), parent=self)
            return
        self.result = record
        self._close()

    def _close(self):
        self._unbind()
        self._engine.detach()
        self.destroy()
