import os
from dotenv import load_dotenv

load_dotenv()

config = {
    "storage_dir": os.getenv("WBS_STORAGE_DIR", ".wbs"),
    "default_project": os.getenv("WBS_DEFAULT_PROJECT", "default"),
    "log_level": os.getenv("WBS_LOG_LEVEL", "WARNING"),
    "chart_dpi": int(os.getenv("WBS_CHART_DPI", 300)),
}
