"""
Pydantic schema definitions for API payloads and stored records.

The stored ``GreenSpace`` doubles as the response body; request
payloads are separate models so clients can never choose an id.
"""
