"""Domain layer for cashbook application.

Services are imported from their modules (``cashbook.domain.summary`` and so
on) rather than re-exported here, so that the database layer can import
``cashbook.domain.entities`` without pulling in the services.
"""
