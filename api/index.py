"""Vercel entrypoint.

Vercel serves ``app`` from this file without installing the project, so the
``src`` directory is put on the import path first.
"""

import sys
from pathlib import Path

_SRC = str(Path(__file__).resolve().parent.parent / "src")
if _SRC not in sys.path:
    sys.path.insert(0, _SRC)

from wedding_gallery.api.asgi import app  # noqa: E402

__all__ = ["app"]
