import os

# Keep test runs from filling logs/ with per-module files
os.environ.setdefault("EYE_FINDER_LOG_TO_FILE", "0")
