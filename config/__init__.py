"""
config — environment-backed settings.
"""
