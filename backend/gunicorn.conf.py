# Bind & workers
bind = "0.0.0.0:8000"
# The fan-out hub lives in-process: every worker has its own subscribers and
# only sees mutations it served. Keep one worker, scale with threads.
workers = 1
worker_class = "gthread"
threads = 16  # each open SSE stream holds one thread
timeout = 0  # SSE streams are long-lived
graceful_timeout = 30
keepalive = 5

wsgi_app = "livefeed.wsgi:app"

# Logs to stdout/stderr (collected by Docker)
accesslog = "-"
errorlog = "-"
loglevel = "info"

# Trust proxy headers
forwarded_allow_ips = "*"
proxy_protocol = False
