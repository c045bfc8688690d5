# Services package init
"""
PhotoShare Backend — Services Package
=======================================

What:  Business logic, independent of HTTP.

Service Inventory:
    - credential_service.py: register / verify accounts (bcrypt)
    - token_service.py:      issue / verify session tokens (JWT)
    - media_service.py:      relay uploads to the media host (httpx)
    - photo_service.py:      create / list / edit / like / delete photos
    - comment_service.py:    add / remove comments inside a photo
    - ownership.py:          the one authorization rule all mutations share

Services are stateless: the database session is passed into every call, so
a module-level singleton of each can be shared by concurrent requests.
"""
