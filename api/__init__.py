"""
api — HTTP routes, middleware and error mapping.
"""
