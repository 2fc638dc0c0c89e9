"""Domain layer for Vale Cashback.

Services are imported from their modules (for example
``valecashback.domain.sale``) so that the database layer can import
``valecashback.domain.entities`` without pulling the services in.
"""
