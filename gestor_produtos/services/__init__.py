"""
Use cases of the product manager.

Each service orchestrates repositories to implement one flow (login,
registration, product management). The application controller calls these
services and turns their outcomes into view state; routers only talk to the
controller.
"""
