"""
Core geometry, numeric primitives, and document contracts.

This package holds the building blocks that do not depend on the GeoJSON
object model: the Envelope box algebra, Position, float guards and the JSON
Schema contracts.
"""
