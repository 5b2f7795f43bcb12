"""
Patricia CLI

Command-line interface for building, querying and verifying tries
committed to a JSON node store.

Usage:
    python -m patricia_cli build entries.json --out state.json
    python -m patricia_cli get state.json alice
    python -m patricia_cli root state.json
    python -m patricia_cli inspect state.json
    python -m patricia_cli verify state.json
"""

__version__ = "0.1.0"
