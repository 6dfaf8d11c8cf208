"""
Mirror Integration — Reconcile target repos and push full mirrors.

This package holds the per-repository sync pipeline: URL derivation,
credential redaction, the GitHub REST client, metadata reconcilers,
the git transfer and the orchestrating manager.
"""
