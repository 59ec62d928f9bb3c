"""Production server startup script for the social graph service.

Entry point for containers: starts the WSGI application under Gunicorn.
"""

import os
import sys

from gunicorn.app.wsgiapp import run


def main():
    """Start the service using Gunicorn.

    Presence of live connections is kept in process memory, so a single
    worker process serves every stream of this instance; each open stream
    holds one thread, hence the large thread pool (``GUNICORN_THREADS``).
    """
    sys.argv = [
        "gunicorn",
        "social_service.wsgi:application",
        "--bind",
        os.getenv("GUNICORN_BIND", "0.0.0.0:8000"),
        "--workers",
        "1",
        "--worker-class",
        "gthread",
        "--threads",
        os.getenv("GUNICORN_THREADS", "64"),
        "--timeout",
        "60",
        "--access-logfile",
        "-",
        "--error-logfile",
        "-",
    ]
    run()


if __name__ == "__main__":
    main()
