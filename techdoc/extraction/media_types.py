from enum import Enum

IMAGE_MEDIA_TYPES = frozenset({
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "image/bmp",
    "image/tiff",
    "image/webp",
})
PDF_MEDIA_TYPE = "application/pdf"


class MediaKind(Enum):
    """Extraction strategy family selected from the declared media type."""

    IMAGE = "image"
    PDF = "pdf"
    UNSUPPORTED = "unsupported"


def classify(declared_media_type: str | None) -> MediaKind:
    """Map a declared media type (parameters and case ignored) to a MediaKind."""
    essence = (declared_media_type or "").split(";", 1)[0].strip().lower()
    if essence in IMAGE_MEDIA_TYPES:
        return MediaKind.IMAGE
    if essence == PDF_MEDIA_TYPE:
        return MediaKind.PDF
    return MediaKind.UNSUPPORTED
