"""Module entrypoint.

Allows:
    python -m log_facilities
"""

from __future__ import annotations

from log_facilities.server.log_server import main

if __name__ == "__main__":
    main()
