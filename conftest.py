"""
Global pytest configuration.
"""
import os
import sys

# Make the top-level packages importable during test collection
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, PROJECT_ROOT)

# Fake credentials so configuration loads without a real key
os.environ.setdefault("ANTHROPIC_API_KEY", "test-key-for-tests")
