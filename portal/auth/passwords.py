from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

PWD = PasswordHasher()

# Verified against when the email is unknown so both failure paths cost one hash check.
_DUMMY_HASH = PWD.hash("portal-dummy-password")


def hash_password(password: str) -> str:
    return PWD.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bool(PWD.verify(password_hash, password))
    except (VerificationError, InvalidHashError):
        return False


def burn_verification(password: str) -> None:
    verify_password(password, _DUMMY_HASH)
