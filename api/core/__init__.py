"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every feature uses: the DB pool,
environment settings and the JSON error envelope. Feature SQL and business
rules stay in the feature packages (`users/`, `documents/`, ...).
"""
