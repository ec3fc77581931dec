"""
Gunicorn configuration for the DevConnector API
Run with: gunicorn devconnector.main:app -c gunicorn.conf.py
"""
import multiprocessing
import os

bind = os.getenv("GUNICORN_BIND", "0.0.0.0:5000")
workers = int(os.getenv("GUNICORN_WORKERS", multiprocessing.cpu_count() * 2 + 1))
worker_class = "uvicorn.workers.UvicornWorker"
proc_name = "devconnector_api"

# Above MONGODB_SERVER_SELECTION_TIMEOUT_MS
timeout = 30
graceful_timeout = 30

# Access log from gunicorn; app logs come from structlog
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()
