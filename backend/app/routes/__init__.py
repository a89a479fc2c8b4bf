# Routes package init
"""
Creator Swipes Backend — API Routes Package
============================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - root.py:         GET    /                          (greeting)
                       GET    /secure                    (token check)
    - auth.py:         POST   /login                     (issue token)
    - swipes.py:       POST   /addSwipe                  (save a link)
    - collections.py:  POST   /createCollection
                       GET    /getCollections
                       PUT    /updateCollection/{id}
                       DELETE /deleteCollection/{id}
                       POST   /addToCollection/{id}
    - health.py:       GET    /health                    (service health check)

Routes stay thin: extract the request, resolve the caller via
Depends(get_current_user_id), call a service, return its result.
"""
