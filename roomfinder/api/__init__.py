"""
REST client layer.

Responsibilities:
- Manage backend and administrative-division API configuration.
- Wrap the hotel backend's room endpoints (search, filter, detail).
- Wrap the public Vietnam provinces API (provinces, districts, wards).
- Normalize backend envelopes and errors into typed models and ``ApiError``.
"""
