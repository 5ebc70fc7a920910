# Routes package init
"""
Travel API Backend — API Routes Package
=========================================

Route Inventory:
    - auth.py:      POST /signup, POST /login
    - places.py:    POST /add-place, DELETE /delete-place/{placeId},
                    GET /places, GET /top-places
    - agencies.py:  POST /add-agency, GET /agencies,
                    POST /add-tour-schedule, GET /tour-schedules/{agencyId}
    - likes.py:     POST /like-place, GET /like-status/{placeId}/{userId}
    - comments.py:  POST /add-comment, POST /add-comment-reply,
                    GET /comments/{placeId}
    - uploads.py:   GET /uploads/{path}  (stored images)
    - health.py:    GET /health

Design Principle:
    Routes are THIN: pull data out of the request, call one service method,
    return its result. Errors are raised by services and formatted by the
    global handlers in main.py.
"""
