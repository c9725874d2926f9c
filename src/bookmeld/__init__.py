# ABOUTME: Bookmeld resolves best-effort book metadata from several bibliographic sources.
# ABOUTME: Exposes the package version used by the CLI and the HTTP User-Agent.

__version__ = "0.1.0"
