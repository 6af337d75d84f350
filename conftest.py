"""Test configuration for ensuring the ``gst_engine`` package is importable without installation."""
from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent

if (ROOT / "gst_engine").exists():
    sys_path = str(ROOT)
    if sys_path not in sys.path:
        sys.path.insert(0, sys_path)
