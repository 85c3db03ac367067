# gunicorn.conf.py
import os
import logging
import sys
import multiprocessing

# Configure logging to stdout
accesslog = '-'
errorlog = '-'
loglevel = os.getenv('LOG_LEVEL', 'info').lower()

# Get PORT from environment or use default
port = os.getenv('PORT', '8080')
bind = f"0.0.0.0:{port}"

# Lookups are a handful of short queries, so sync workers plus a few threads suffice
cores = multiprocessing.cpu_count()
workers = int(os.getenv('WEB_CONCURRENCY', min(cores * 2 + 1, 8)))
threads = 4

# Log configuration on startup
def on_starting(server):
    logger = logging.getLogger('gunicorn.error')
    logger.setLevel(logging.INFO)
    logger.addHandler(logging.StreamHandler(sys.stdout))
    logger.info(f"Starting gunicorn with {workers} workers on port {port}")
    if not os.getenv('REDIS_URL'):
        logger.info("REDIS_URL not set: each worker throttles clients independently")

timeout = 30
keepalive = 5
worker_class = "sync"

# Process naming
proc_name = "verse_api"
default_proc_name = "verse_api"

# Graceful server restart
graceful_timeout = 30  # Give workers 30 seconds to finish serving requests
