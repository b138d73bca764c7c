"""
Persistence adapters.

`product_repository` wraps the embedded SQL store (users and products);
`local_storage` is the durable key-value slot used for the session.
Services depend on these classes rather than touching SQLAlchemy or files.
"""
