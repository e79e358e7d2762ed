from passlib.context import CryptContext

_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class PasswordHandler:

    @staticmethod
    def hash(password: str) -> str:
        return _context.hash(password)

    @staticmethod
    def verify(password: str, hashed: str) -> bool:
        if not hashed:
            return False
        return _context.verify(password, hashed)
