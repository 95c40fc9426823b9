"""
Gunicorn configuration for the dashboard API.

Run with:  gunicorn app.main:app -c gunicorn.conf.py
Env vars that override defaults:
  PORT     - TCP port to bind (default: 8000)
  WORKERS  - number of worker processes (default: 1)
"""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# The planner position is held in process memory, so more than one worker
# gives each worker its own drill-down state.
workers = int(os.environ.get("WORKERS", "1"))

worker_class = "uvicorn.workers.UvicornWorker"

keepalive = 5

# The reward call can take a while; leave headroom above REWARD_TIMEOUT_SECONDS.
timeout = 60

# stdout only; app loggers write there too (app/core/logging.py).
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sµs'

graceful_timeout = 30
