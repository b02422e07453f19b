"""
DOMAIN LAYER

This layer contains:
- Entities: User, Message, Session
- Value Objects: UserId, Username, MessageId, AuthIdentity
- Ports: Interfaces that the storage, hashing and session adapters implement
- Exceptions: Domain errors, each carrying a stable ``kind``

RULES:
1. NO framework imports (no FastAPI, Redis, Pydantic, etc.)
2. NO I/O operations
3. Only depends on Python stdlib
"""
