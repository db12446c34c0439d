"""tasks/ -- Ownership-scoped task storage.

Layer rule: tasks/ imports from core/ and third-party libraries only.
It does NOT import from api/ or auth/.
"""
