"""Lanzador de wvpa sin instalar el paquete.

`python -m main dial -p` deriva la contraseña con el `wvpa.toml` del usuario;
el resto de subcomandos (`matrix`, `spec`, `doctor`) funcionan igual que con el
script `wvpa` instalado. Añade `src/` al `sys.path` porque `core`, `adapters` y
`cli` viven ahí.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    project_root = Path(__file__).resolve().parent
    src = project_root / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
