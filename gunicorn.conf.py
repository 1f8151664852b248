# Gunicorn configuration for Calendarium
#
# Rate-limit counters live in process memory unless RATELIMIT_STORAGE_URI
# points at a shared backend, so the default is a single worker. Requests
# are served on threads; the feast registries are read-only after startup.
import os

workers = int(os.environ.get("WEB_CONCURRENCY", "1"))
threads = int(os.environ.get("GUNICORN_THREADS", "4"))
bind = os.environ.get("GUNICORN_BIND", "0.0.0.0:8080")
timeout = int(os.environ.get("GUNICORN_TIMEOUT_SECONDS", "120"))
graceful_timeout = int(os.environ.get("GUNICORN_GRACEFUL_TIMEOUT_SECONDS", "30"))


def post_fork(server, worker):
    server.log.info("Worker spawned (pid: %s).", worker.pid)
