"""
Pydantic schema definitions for API payloads.

Schemas are separated from the stored entities to decouple the API
representation from storage.  All wire names are camelCase.
"""
