"""WSGI entrypoint: ``gunicorn -c gunicorn.conf.py``."""

from livefeed import create_app

app = create_app()
