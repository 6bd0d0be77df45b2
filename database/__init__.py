"""
database — models, engine/session wiring and queries.
"""
