import hmac


def is_authenticated(token: str, secret: str) -> bool:
    """Compare a presented credential with the shared secret in constant time.

    Both values are compared as UTF-8 bytes. A length mismatch fails right
    away; equal lengths go through ``hmac.compare_digest``, whose running
    time does not depend on where the first differing byte is.
    """
    if not secret:
        return False
    a = token.encode("utf-8")
    b = secret.encode("utf-8")
    if len(a) != len(b):
        return False
    return hmac.compare_digest(a, b)
