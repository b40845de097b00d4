"""VBA Documentation Extractor.

Parses VBA modules and their '@Tag annotation comments into a
structured, JSON-serializable document for documentation tooling.
"""

__version__ = "0.1.0"
