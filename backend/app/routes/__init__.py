# Routes package init
"""
Noteful Backend — API Routes Package
=====================================

Route Inventory:
    - auth.py:      POST /auth, POST /auth/refresh
    - users.py:     POST /users
    - notes.py:     GET/POST /notes, GET/PUT/DELETE /notes/{id}
    - taxonomy.py:  GET/POST /folders, GET/POST /tags
    - health.py:    GET /health

Routes stay thin: pull the caller and inputs out of the request, call a
service, set status code and headers. Ownership and validation rules live
in the services.
"""
