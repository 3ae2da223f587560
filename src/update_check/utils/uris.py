"""Uri helpers"""

__all__ = ["join"]


def join(*parts: str) -> str:
    """Join url or path parts with single slashes, skipping empty parts."""
    parts = [part for part in parts if part]
    if not parts:
        return ""

    head, *tail = parts
    return "/".join([head.rstrip("/"), *(part.strip("/") for part in tail)])
