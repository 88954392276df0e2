"""
NGO Site Backend - API Routes Package
=====================================

Route Inventory:
    - members.py:  GET/POST /api/members, GET/PUT/DELETE /api/members/{id}
    - events.py:   GET/POST /api/events,  GET/PUT/DELETE /api/events/{id}
    - uploads.py:  GET /uploads/{filename}   (member images)
    - health.py:   GET /  and  GET /health

Routes stay thin: extract request data, call a service, pick the status code.
Errors propagate as NgoSiteError subclasses to the handlers in main.py.
"""
