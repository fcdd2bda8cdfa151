"""Gunicorn config for container deployment."""
import os

# Bind to the platform's PORT or default 8000
bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Inventory state is a single JSON snapshot directory; one worker keeps
# writes serialized. Raise WEB_CONCURRENCY only with a shared-nothing store.
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.environ.get("WEB_CONCURRENCY", "1"))
wsgi_app = "skytracker.main:app"

# Sheet fetches and workbook exports finish well inside this
timeout = 60

graceful_timeout = 30

# Keep-alive above the usual 60s proxy keep-alive
keepalive = 65

accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
