"""WSGI entrypoint for the Dash intake app."""

from __future__ import annotations

from doc_intake.app import create_app

app = create_app()
server = app.server


if __name__ == "__main__":
    app.run(debug=True)
