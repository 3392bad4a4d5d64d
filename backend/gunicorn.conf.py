import os

# Bind & workers
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
# Revocation state is per process without REDIS_URL, so default to one worker then.
workers = int(os.getenv("GUNICORN_WORKERS", "2" if os.getenv("REDIS_URL") else "1"))
threads = int(os.getenv("GUNICORN_THREADS", "4"))
timeout = 60
graceful_timeout = 30
keepalive = 5

wsgi_app = "wsgi:app"

# Logs to stdout/stderr (collected by Docker)
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Proxy headers (ProxyFix in the app trusts one hop)
forwarded_allow_ips = "*"
proxy_protocol = False
