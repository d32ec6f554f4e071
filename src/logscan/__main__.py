"""Module entrypoint.

Allows:
    python -m logscan
"""

from __future__ import annotations

from logscan.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
