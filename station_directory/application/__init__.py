"""
APPLICATION LAYER - Use cases on top of the domain ports

- services/ → UserDirectory, MessageStore, AuthGate
- dto/      → pydantic views handed to the presentation layer
"""
