"""Configuration commune des tests : ENV=test (pas d'echo SQL), posé avant le premier import de app.core.config."""
import os

os.environ.setdefault("ENV", "test")
