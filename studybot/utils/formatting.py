import re

FILE_TYPE_MAP = {
    "pdf": "pdf",
    "doc": "doc",
    "docx": "doc",
    "txt": "doc",
    "ppt": "ppt",
    "pptx": "ppt",
    "xls": "xlsx",
    "xlsx": "xlsx",
    "csv": "xlsx",
    "zip": "zip",
    "rar": "zip",
    "7z": "zip",
    "png": "image",
    "jpg": "image",
    "jpeg": "image",
    "gif": "image",
    "webp": "image",
}

# Uploads are stored as "<unix millis>_<original name>"
_UPLOAD_PREFIX_RE = re.compile(r"^\d{13}_")
_EXTENSION_RE = re.compile(r"\.[^/.]+$")


def to_display_name(value: str) -> str:
    """Normalize *value* by removing direction markers and underscores."""
    if not value:
        return ""
    cleaned = re.sub(r"[‎‏]", "", value)
    return cleaned.replace("_", " ").strip()


def file_display_name(object_name: str) -> str:
    """Turn a stored object name into a human readable title.

    >>> file_display_name("1718000000000_unit_1-notes.pdf")
    'unit 1 notes'
    """
    if not object_name:
        return ""
    stem = _EXTENSION_RE.sub("", object_name)
    stem = _UPLOAD_PREFIX_RE.sub("", stem)
    stem = stem.replace("-", " ")
    return re.sub(r"\s+", " ", to_display_name(stem))


def file_type(name: str) -> str:
    """Classify *name* by extension into the coarse types used for icons."""
    if "." not in name:
        return "other"
    ext = name.rsplit(".", 1)[1].lower()
    return FILE_TYPE_MAP.get(ext, "other")


def human_size(num_bytes: int | None) -> str:
    if not num_bytes or num_bytes <= 0:
        return "0 KB"
    if num_bytes > 1024 * 1024:
        return f"{num_bytes / (1024 * 1024):.1f} MB"
    # ceil division keeps tiny files from showing as 0 KB
    return f"{-(-num_bytes // 1024)} KB"


def compact_code(subject_code: str) -> str:
    """``"CSA 103"`` -> ``"CSA103"``."""
    return re.sub(r"\s+", "", subject_code or "")


__all__ = [
    "FILE_TYPE_MAP",
    "to_display_name",
    "file_display_name",
    "file_type",
    "human_size",
    "compact_code",
]
