#!/usr/bin/env python3
"""Direct launcher for the Personal Finance Tracker.

Runs Streamlit on ``finance_tracker/dashboard.py`` from the project root so
the package imports resolve.
"""

import subprocess
import sys
from pathlib import Path

project_root = Path(__file__).parent.resolve()
app_path = project_root / "finance_tracker" / "dashboard.py"

if __name__ == "__main__":
    sys.exit(subprocess.call([
        sys.executable, "-m", "streamlit", "run",
        str(app_path),
    ], cwd=project_root))
