"""
Saved-places export ingestion.

Responsibilities:
- Accept a saved-places export (a list of records or a GeoJSON-style
  ``features`` collection).
- Extract one canonical place name per record, whatever its schema.
- Report exports that are malformed or contain no usable places.
"""
