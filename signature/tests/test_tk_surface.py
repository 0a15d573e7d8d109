"""
signature/tests/test_tk_surface.py

Tk adapters; skipped where no display is available.
"""

from __future__ import annotations

import tkinter as tk
import unittest

from signature.gui.tk_surface import TkCanvasSurface, TkFrameScheduler, bind_pointer_events
from signature.logic.capture_engine import CaptureEngine


class TestTkAdapters(unittest.TestCase):
    def setUp(self) -> None:
        try:
            self.root = tk.Tk()
        except tk.TclError as exc:
            self.skipTest(f"no display: {exc}")
        self.root.withdraw()
        self.canvas = tk.Canvas(self.root, width=120, height=80)
        self.canvas.pack()
        self.surface = TkCanvasSurface(self.canvas, device_pixel_ratio=1.0)

    def tearDown(self) -> None:
        root = getattr(self, "root", None)
        if root is not None:
            root.destroy()

    def test_unbind_keeps_surface_bindings(self) -> None:
        engine = CaptureEngine(self.surface)
        unbind = bind_pointer_events(self.surface, engine)
        self.assertTrue(self.canvas.bind("<ButtonPress-1>"))
        unbind()
        self.assertFalse(self.canvas.bind("<ButtonPress-1>"))
        self.assertFalse(self.canvas.bind("<B1-Motion>"))
        self.assertTrue(self.canvas.bind("<Configure>"))
        self.assertTrue(self.canvas.bind("<Destroy>"))

    def test_cancelled_frame_never_runs(self) -> None:
        scheduler = TkFrameScheduler(self.root, interval_ms=1)
        calls: list[float] = []
        handle = scheduler.request_frame(calls.append)
        scheduler.cancel_frame(handle)
        self.root.after(20, self.root.quit)
        self.root.mainloop()
        self.assertEqual(calls, [])


if __name__ == "__main__":
    unittest.main()
