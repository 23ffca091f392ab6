"""WSGI entry point for the net worth stress test application."""

import os
import sys

from app import create_app
from app.config import get_global_settings

app = create_app()


def _cli_port(argv, default: int) -> int:
    """Read ``--port N`` from the command line, falling back to ``default``."""
    if "--port" in argv:
        index = argv.index("--port")
        if index + 1 < len(argv):
            return int(argv[index + 1])
    return default


if __name__ == "__main__":
    port = _cli_port(sys.argv[1:], int(os.environ.get("PORT", 5000)))
    debug = get_global_settings().app_env == "development"
    app.run(debug=debug, host="0.0.0.0", port=port)
