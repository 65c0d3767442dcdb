"""Infrastructure layer - Storage backends, repositories and built-in hooks.

This layer contains:
- Collection storage (JSON files, in-memory)
- The document repository
- Asset storage (local uploads directory)
- Built-in derivation hooks
"""
