"""Console-script entrypoint.

The CLI is implemented in `pullr.orchestrator.main`.
"""

from __future__ import annotations

from pullr.orchestrator.main import main

__all__ = ["main"]


if __name__ == "__main__":
    raise SystemExit(main())
