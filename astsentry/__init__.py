"""
astsentry: syntax-tree based static analysis for JavaScript, TypeScript and Python.
"""

__version__ = "0.1.0"
