"""
Gunicorn configuration for the habit score API.

Env vars that override defaults:
  PORT       — TCP port to bind
  WORKERS    — number of worker processes (default: 2)
  LOG_LEVEL  — gunicorn log level, shared with the app's logging setup
"""
import os

wsgi_app = "habitscore.main:app"

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Each worker holds its own ScoreStore instances; stores are never shared.
workers = int(os.environ.get("WORKERS", "2"))

worker_class = "uvicorn.workers.UvicornWorker"

keepalive = 5

# Long first-time score computations stay well below this.
timeout = 120

# stdout only; the platform captures it.
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sµs'

graceful_timeout = 30
