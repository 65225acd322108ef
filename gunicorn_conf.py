import os
import sys

# Ensure the src directory is on sys.path so "import festival" works
ROOT = os.path.abspath(os.path.dirname(__file__))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from festival.config.config import Config
from festival.services.database import close_mongoDB

# gunicorn -c gunicorn_conf.py wsgi:app
bind = f"{Config.FLASK_HOST}:{Config.FLASK_PORT}"
workers = int(os.getenv("WEB_CONCURRENCY", 2))
threads = int(os.getenv("GUNICORN_THREADS", 4))
# each worker opens its own MongoClient; pymongo clients are not fork safe
preload_app = False
pythonpath = SRC


def worker_exit(server, worker):
    """
    Gunicorn hook executed in the worker process right before it exits.
    Close the MongoDB client opened by create_app in this worker.
    """
    close_mongoDB()
    server.log.info(f"Closed MongoDB connection in worker {worker.pid}")
