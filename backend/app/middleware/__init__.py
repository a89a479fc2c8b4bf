# Middleware package init
"""
Creator Swipes Backend — Middleware Package
============================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [Rate Limit] → [CORS] → Route Handler

    1. Request ID first: every response, 429s included, carries X-Request-ID
    2. Logging: access line with status and duration (rejections too)
    3. Rate Limit: abusive clients are turned away before routing
    4. CORS: FastAPI's CORSMiddleware (handles preflight)

Authentication is not middleware: protected routes declare
Depends(get_current_user_id) from app.auth.
"""
