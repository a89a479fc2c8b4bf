"""
Creator Swipes Backend — Services Layer
========================================

What:  Business rules between the routes (HTTP) and the database.
How:   Each service is a plain class with a module-level singleton; routes
       pass in the request's AsyncSession and the caller's id.

Service Inventory:
    - AuthService: username/password check → signed access token
    - SwipeService: persists swipes
    - CollectionService: owner-scoped collection CRUD with quota checks
"""
