# Routes package init
"""
PhotoShare Backend — API Routes Package
=========================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - auth.py:      POST   /signup, /login
    - photos.py:    POST   /upload
                    GET    /photos
                    PUT    /photos/{id}/description
                    POST   /photos/{id}/like
                    DELETE /photos/{id}
    - comments.py:  POST   /photos/{id}/comment
                    DELETE /photos/{photoId}/comment/{commentId}
    - health.py:    GET    /health

Routes stay thin: they pull data out of the request, call a service, and
wrap the result in a response envelope. Business rules live in services.
"""
