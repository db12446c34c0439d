"""auth/ -- Authentication package for the task list service.

Password hashing, bearer tokens, the credential store, and the
register/login service.

Layer rule: auth/ imports from core/ and third-party libraries only.
It does NOT import from api/ or tasks/.
api/ imports from auth/, not the other way around.
"""
