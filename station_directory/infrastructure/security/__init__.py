from station_directory.infrastructure.security.bcrypt_hasher import BcryptPasswordHasher

__all__ = ["BcryptPasswordHasher"]
