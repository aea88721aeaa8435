# Import shim for examples: "from _import_shim import ensure_repo_import"
import sys
from pathlib import Path


def ensure_repo_import():
    repo_root = Path(__file__).resolve().parents[1]
    python_dir = repo_root / "python"
    # Use the in-repo scenefile package when it is not installed
    if python_dir.exists() and str(python_dir) not in sys.path:
        sys.path.insert(0, str(python_dir))
