# forum/core/security.py
import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError

# scrypt: mismos parámetros que el hash que ya hay en la base
# (N=16384, r=8, p=1, clave de 64 bytes, sal de 16 bytes en hex)
SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1
SCRYPT_DKLEN = 64
SALT_BYTES = 16

SESSION_ALGORITHM = "HS256"


def _scrypt(password: str, salt: str) -> bytes:
    # la sal se usa como texto hex, no como bytes crudos
    return hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt.encode("ascii"),
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
        dklen=SCRYPT_DKLEN,
    )


def hash_password(password: str) -> str:
    """Devuelve `<digest hex>.<sal hex>`."""
    salt = secrets.token_hex(SALT_BYTES)
    return f"{_scrypt(password, salt).hex()}.{salt}"


def verify_password(password: str, hashed: str) -> bool:
    """
    Compara en tiempo constante. Un valor almacenado mal formado
    (sin '.', hex inválido, partes vacías) nunca valida.
    """
    if not hashed or "." not in hashed:
        return False
    digest_hex, salt = hashed.split(".", 1)
    if not digest_hex or not salt:
        return False
    try:
        expected = bytes.fromhex(digest_hex)
        supplied = _scrypt(password, salt)
    except ValueError:
        # hex inválido o sal no ASCII (UnicodeEncodeError es ValueError)
        return False
    if len(expected) != SCRYPT_DKLEN:
        return False
    return hmac.compare_digest(expected, supplied)


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


def encode_session_cookie(session_id: str, secret: str, ttl_seconds: int) -> str:
    """Firma el id de sesión para la cookie (JWT HS256 con caducidad)."""
    expire = datetime.now(timezone.utc) + timedelta(seconds=ttl_seconds)
    payload = {"sid": session_id, "exp": expire}
    return jwt.encode(payload, secret, algorithm=SESSION_ALGORITHM)


def decode_session_cookie(token: str, secret: str) -> str:
    payload = jwt.decode(token, secret, algorithms=[SESSION_ALGORITHM])
    sid = payload.get("sid")
    if not sid:
        raise JWTError("missing sid")
    return sid
