"""cmdtree: shell completion engine for namespace/resource/verb CLIs."""

__version__ = "0.1.0"
