"""Pytest configuration: adds the repository root to sys.path for test discovery."""

import os
import sys

# Allow running the suite from a checkout without installing the package
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
