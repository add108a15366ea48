from dataclasses import dataclass


@dataclass(frozen=True)
class UploadedBlob:
    """Location of a stored file as reported by a blob store."""

    path: str
    name: str
    size: int
