# config.py
import os

from dotenv import load_dotenv

from habits_repo import SqlStorage, make_engine
from local_storage import LocalStorage

load_dotenv()


def load_settings(overrides=None):
    """Settings from the environment (.env is read first); overrides win."""
    settings = {
        "SECRET_KEY": os.environ.get("SECRET_KEY", "your-secret-key-change-this-in-production"),
        "STORAGE_BACKEND": os.environ.get("STORAGE_BACKEND", "json"),
        "STORAGE_FILE": os.environ.get("STORAGE_FILE", "habit_tracker_data.json"),
        "DATABASE_URL": os.environ.get("DATABASE_URL", "sqlite:///habit_tracker.db"),
        "HOST": os.environ.get("HOST", "127.0.0.1"),
        "PORT": int(os.environ.get("PORT", "5000")),
    }
    if overrides:
        settings.update(overrides)
    return settings


def open_store(settings):
    """Build the key/value store named by STORAGE_BACKEND (json or sqlite)."""
    backend = (settings.get("STORAGE_BACKEND") or "json").lower()
    if backend == "json":
        return LocalStorage(settings["STORAGE_FILE"])
    if backend in ("sqlite", "sql"):
        return SqlStorage(make_engine(settings["DATABASE_URL"]))
    raise ValueError(f"Unknown STORAGE_BACKEND '{backend}'")
