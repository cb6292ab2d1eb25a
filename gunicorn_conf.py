import multiprocessing
import os

# Gunicorn configuration file
# For FastAPI/Uvicorn, we use the UvicornWorker
# Run with: gunicorn -c gunicorn_conf.py tasktracker.main:app

# Same default port as the mobile client expects
bind = f"0.0.0.0:{os.getenv('PORT', '3000')}"

# Worker configuration
# Standard formula: (2 x num_cores) + 1
workers = multiprocessing.cpu_count() * 2 + 1
worker_class = "uvicorn.workers.UvicornWorker"

# Timeout and Keepalive
timeout = 120
keepalive = 5

# Logging
accesslog = "-" # Log to stdout
errorlog = "-"  # Log to stderr
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Process management
name = "tasktracker_api"
reload = False  # Set to True for development only
