import hashlib


def sha1_text(s: str) -> str:
    return hashlib.sha1(s.encode("utf-8")).hexdigest()


def sha1_bytes(b: bytes) -> str:
    return hashlib.sha1(b).hexdigest()


def chunk_id(source_id: str, index: int, text: str) -> str:
    """Stable store key for one chunk of one source document."""
    return sha1_text(f"{source_id}::{index}::{text[:64]}")
