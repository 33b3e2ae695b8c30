"""
Model catalog package.

Responsibilities:
- Normalize a provider-data export into the canonical catalog CSV.
- Load the processed catalog into read-only ``ModelRecord`` objects.
- Search and filter the catalog for browsing.
"""
