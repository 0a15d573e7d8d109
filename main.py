"""
Signature pad demo window.

    python main.py [token]

Draw a signature via "Sign…", then replay it. Records are stored encrypted
under the [Storage] paths of the configuration.
"""
from __future__ import annotations

import logging
import sys
import tkinter as tk

from core.config.config_service import config_service
from core.logging.logic.logger import logger
from signature.gui.signature_view import SignatureView
from signature.logic.signature_service import SignatureService


class MainWindow(tk.Tk):
    def __init__(self, token: str) -> None:
        super().__init__()
        self.title(f"Signature – {token}")
        self.geometry("720x320")

        service = SignatureService.from_config(config_service, logger=logger)
        view = SignatureView(self, service=service, token=token)
        view.pack(fill="both", expand=True)


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=getattr(logging, config_service.logging.level.upper(), logging.INFO),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    MainWindow(args[0] if args else "demo").mainloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
