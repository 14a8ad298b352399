"""Root conftest for TODOAPP"""
import os
import tempfile
from pathlib import Path

# the config module settles on its file as it is imported, so point it at a
# scratch location before any test module imports it
os.environ["TODOAPP_CONFIG"] = str(
    Path(tempfile.mkdtemp(prefix="todoapp-test-")) / "todoapp.ini"
)
os.environ.pop("DATABASE_URL", None)
