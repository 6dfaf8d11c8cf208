"""
repo-sync — Bulk-mirror GitHub repositories between two hosts.

Mirrors every repository listed in a YAML file from a source GitHub host
to a target GitHub host (github.com or GitHub Enterprise Server), and
reconciles the target's metadata around the transfer.
"""

__version__ = "1.0.0"
