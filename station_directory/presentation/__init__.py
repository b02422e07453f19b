"""
PRESENTATION LAYER - HTTP surface (FastAPI)

- api/          → routers, one per area (auth, users, chat, admin)
- dependencies/ → session resolution for protected routes
- errors.py     → DomainError kind → HTTP status
"""
