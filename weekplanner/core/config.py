import os

# Google Apps Script web app backing the planner sheet
ENDPOINT_URL = os.environ.get(
    "WEEKPLANNER_ENDPOINT",
    "https://script.google.com/macros/s/AKfycbzssMwrDnQdhQSAn7tZSfqe7ZbptzgRWWn-BdORa9bIV89C9xr1x-yHiWSZ0QSkTrHT/exec",
)
WIRE_FORMAT = os.environ.get("WEEKPLANNER_WIRE_FORMAT", "tasks")  # tasks | days

SAVE_DEBOUNCE_MS = int(os.environ.get("WEEKPLANNER_SAVE_DEBOUNCE_MS", "1500"))
REQUEST_TIMEOUT = float(os.environ.get("WEEKPLANNER_TIMEOUT", "10"))
LOG_LEVEL = os.environ.get("WEEKPLANNER_LOG_LEVEL", "INFO")

WINDOW_GEOMETRY = "1100x760"
TOPMOST = os.environ.get("WEEKPLANNER_TOPMOST", "").lower() in ("1", "true", "yes")
