"""Module entrypoint.

Allows:
    python -m source_context_filter
"""

from __future__ import annotations

from source_context_filter.server.log_server import main

if __name__ == "__main__":
    main()
