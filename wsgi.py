"""WSGI entrypoint for Gunicorn.

Usage:
  gunicorn -w 1 -b 0.0.0.0:8000 wsgi:app

Use a single worker: the ledger lives in process memory.
"""

from lottery import create_app

app = create_app()
