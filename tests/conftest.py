"""
Shared pytest configuration.

Makes the project root importable when the package is not installed.
"""
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
