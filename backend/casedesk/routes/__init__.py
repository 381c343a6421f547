"""
CaseDesk Backend: API Routes Package
====================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - health.py:  GET  /                     (plain-text liveness)
                  GET  /health               (database probe)
    - auth.py:    POST /api/login            (password → bearer token)
    - cases.py:   GET/POST /api/cases, PUT/DELETE /api/cases/{id}
    - notes.py:   GET/POST /api/notes, PUT/DELETE /api/notes/{id}

Design Principle:
    Routes stay thin. They pick the service call, the status code and the
    auth dependency; sanitizing and SQL live in the services.
"""
