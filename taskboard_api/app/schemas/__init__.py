"""
Pydantic schema definitions for API payloads.

Each domain (users, projects, tasks, tags) defines its own request and
response models.  Schemas are separated from the persistence records in
``app.models`` to decouple the API representation from storage.
"""
