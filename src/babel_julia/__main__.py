"""Allow ``python -m babel_julia``."""

from __future__ import annotations

from babel_julia.cli import app

if __name__ == "__main__":
    app()
