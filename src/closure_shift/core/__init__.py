"""
Core Package.

Contains the migration logic:
- Lossless JavaScript CST (``jscst``)
- Pattern matcher, class registry, JSDoc comment handling
- Rewriter pipeline and passes
- Migration engine
"""
