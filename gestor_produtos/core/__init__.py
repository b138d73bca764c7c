"""
Core utilities shared across the application.

This package hosts configuration (env vars, data directory) and logging
setup. Services and routers depend on these primitives instead of reading
os.environ directly.
"""
