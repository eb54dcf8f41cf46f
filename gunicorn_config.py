"""
Gunicorn settings for the application container.

The bind address is passed on the command line by the bootstrap handoff;
everything else is read from here.
"""
import os

workers = int(os.environ.get('GUNICORN_WORKERS', '4'))
timeout = 30
keepalive = 2
max_requests = 1000
max_requests_jitter = 50
preload_app = True
accesslog = '-'
errorlog = '-'
loglevel = os.environ.get('LOG_LEVEL', 'info').lower()
worker_tmp_dir = '/dev/shm' if os.path.isdir('/dev/shm') else None
