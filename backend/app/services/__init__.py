# Services package init
"""
Noteful Backend — Services Layer
=================================

Business rules between the routes (HTTP) and the models (persistence).

Service Inventory:
    - AuthService:              password hashing, token issue/verify, login
    - UserService:              account registration
    - NoteService:              owner-scoped note CRUD and search
    - FolderService/TagService: owner-scoped folder and tag lists

Services take an AsyncSession and the caller's user id, raise the
exceptions in app.exceptions, and return response models rather than ORM
rows, so nothing lazy-loads after the session is gone.
"""
