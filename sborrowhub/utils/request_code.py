import secrets
import string

from sborrowhub.utils.clock import utcnow

_CHARS = string.ascii_uppercase + string.digits


def generate_request_code(now=None) -> str:
    """BR-YYYYMMDD-XXXX, e.g. BR-20251106-A3F9."""
    now = now or utcnow()
    suffix = "".join(secrets.choice(_CHARS) for _ in range(4))
    return f"BR-{now:%Y%m%d}-{suffix}"
