"""
Stored entity types.

These are plain dataclasses owned by the repository.  Wire shapes live
in ``schemas`` and are produced by ``services.mapping``.
"""
