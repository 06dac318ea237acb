import os
from pathlib import Path
from typing import Union

from log_helper import log

CONTEXT_FILE = os.getenv("CONTEXT_FILE", str(Path(__file__).resolve().parent / "context.txt"))


class ContextStore:
    """Process-wide business context backed by a single text file.

    Updates replace the whole document; nothing is merged.
    """

    def __init__(self, path: Union[str, Path] = CONTEXT_FILE):
        self.path = Path(path)
        self.text = ""

    def load(self) -> str:
        if self.path.exists():
            self.text = self.path.read_text(encoding="utf-8")
            log("info", "context_loaded", path=str(self.path), chars=len(self.text))
        else:
            self.text = ""
            log("info", "context_missing", path=str(self.path))
        return self.text

    def update(self, text: str) -> None:
        self.path.write_text(text, encoding="utf-8")
        self.text = text
        log("info", "context_updated", path=str(self.path), chars=len(text))
