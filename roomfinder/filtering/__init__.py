"""
Room filtering package.

Responsibilities:
- Model filter criteria and the UI's sort presets.
- Prefer the backend's filter endpoint, falling back to a local
  computation over the already-fetched room list when it fails.
- Discard results of filter requests that were superseded by newer ones.
"""
