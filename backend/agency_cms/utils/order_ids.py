import secrets
import string
import time

_ALPHABET = string.ascii_uppercase + string.digits

def generate_order_id():
    """``ORD-<last 6 digits of epoch ms>-<6 random upper-case chars>``"""
    timestamp = str(int(time.time() * 1000))
    suffix = ''.join(secrets.choice(_ALPHABET) for _ in range(6))
    return f"ORD-{timestamp[-6:]}-{suffix}"
