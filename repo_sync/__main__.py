"""
Run the CLI as a module.

Usage:
    python -m repo_sync sync --file repos.yml
"""

from .main import cli

if __name__ == "__main__":
    cli()
