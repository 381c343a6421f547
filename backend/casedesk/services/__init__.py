"""
CaseDesk Backend: Services Layer
================================

What:  Logic between the routes (HTTP) and the DataStore gateway.

Service Inventory:
    - sanitizer:      ``sanitize()`` for free-text fields (nh3)
    - TokenService:   bearer token issue/verify (PyJWT)
    - CaseService:    case list/create/update/delete
    - NoteService:    note list/create/update/delete

Services never touch Request/Response objects, so they are unit-tested with
a mocked DataStore.
"""
