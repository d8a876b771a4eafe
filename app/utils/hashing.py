import secrets
import string

from pwdlib import PasswordHash

password_hash = PasswordHash.recommended()  # argon2id


def get_password_hash(plain: str) -> str:
    return password_hash.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    if not plain or not hashed:
        return False
    return password_hash.verify(plain, hashed)


def generate_password(length: int = 10) -> str:
    chars = string.ascii_letters + string.digits
    for c in "0OoIl":  # remove confusing chars
        chars = chars.replace(c, "")
    return "".join(secrets.choice(chars) for _ in range(length))
