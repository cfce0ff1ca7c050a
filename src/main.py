"""Script de ejecución.

Permite ejecutar la CLI con `python -m main` desde `src/` durante desarrollo.
"""

from __future__ import annotations

import sys

# rasdial/scutil output and Rich tables on Windows consoles (cp1252 vs utf-8).
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
