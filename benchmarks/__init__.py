"""Performance benchmarks for activeqp.

This package contains timing runs of the active-set solver on random dense
convex problems.
"""
