from uuid import uuid4


def new_id(prefix: str) -> str:
    """Return an opaque, prefixed document id such as ``req_3f2a...``."""
    return f"{prefix}_{uuid4().hex}"
