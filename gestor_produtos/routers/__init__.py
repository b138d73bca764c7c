"""
FastAPI routers.

`pages` renders the three screens and receives the form posts; it only talks
to the AppController stored on ``app.state``.
"""
