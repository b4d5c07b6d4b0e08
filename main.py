"""Development entrypoint.

Exposes ``app`` for ``flask --app main run`` and runs the dev server directly.
"""

from lottery import create_app

app = create_app()


if __name__ == "__main__":
    app.run(host="127.0.0.1", port=8000, debug=False)
