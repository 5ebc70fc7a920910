# Services package init
"""
Travel API Backend — Services Layer
=====================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
How:   Each service receives the request's AsyncSession, runs its access check
       and statement(s), and raises application exceptions on failure.

Service Inventory:
    - UserService:    signup, login, admin access check
    - PlaceService:   add/delete places, list places and top places
    - AgencyService:  add/list agencies, add/list tour schedules
    - LikeService:    like/unlike toggle, like status
    - CommentService: comments, admin replies, threaded listing
    - FileService:    image validation, storage, and cleanup

Services are stateless singletons; all per-request state lives in the session.
"""
