"""
INFRASTRUCTURE LAYER - Concrete adapters for the domain ports

- persistence/ → JSON file and Redis storage backends
- cache/       → async Redis client factory
- sessions/    → in-process session table
- security/    → bcrypt password hashing
"""
