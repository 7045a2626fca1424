"""Mapping between MIME type strings, MIME codes and file extensions."""

from __future__ import annotations

from tapedrive.header import MimeType

_EXTENSIONS = {
    MimeType.IMAGE_PNG: "png",
    MimeType.IMAGE_JPEG: "jpg",
    MimeType.IMAGE_GIF: "gif",
    MimeType.IMAGE_WEBP: "webp",
    MimeType.IMAGE_BMP: "bmp",
    MimeType.IMAGE_TIFF: "tiff",
    MimeType.APPLICATION_PDF: "pdf",
    MimeType.APPLICATION_MSWORD: "doc",
    MimeType.APPLICATION_DOCX: "docx",
    MimeType.APPLICATION_ODT: "odt",
    MimeType.TEXT_PLAIN: "txt",
    MimeType.TEXT_HTML: "html",
    MimeType.TEXT_CSS: "css",
    MimeType.TEXT_JAVASCRIPT: "js",
    MimeType.TEXT_CSV: "csv",
    MimeType.TEXT_MARKDOWN: "md",
    MimeType.AUDIO_MPEG: "mp3",
    MimeType.AUDIO_WAV: "wav",
    MimeType.AUDIO_OGG: "ogg",
    MimeType.AUDIO_FLAC: "flac",
    MimeType.VIDEO_MP4: "mp4",
    MimeType.VIDEO_WEBM: "webm",
    MimeType.VIDEO_MPEG: "mpeg",
    MimeType.VIDEO_AVI: "avi",
    MimeType.APPLICATION_JSON: "json",
    MimeType.APPLICATION_XML: "xml",
    MimeType.APPLICATION_ZIP: "zip",
    MimeType.APPLICATION_GZIP: "gz",
    MimeType.APPLICATION_TAR: "tar",
    MimeType.FONT_WOFF: "woff",
    MimeType.FONT_WOFF2: "woff2",
    MimeType.FONT_TTF: "ttf",
    MimeType.FONT_OTF: "otf",
    MimeType.APPLICATION_RTF: "rtf",
    MimeType.APPLICATION_SQL: "sql",
    MimeType.APPLICATION_YAML: "yaml",
    MimeType.UNKNOWN: "bin",
}

_TYPES = {
    ("image", "png"): MimeType.IMAGE_PNG,
    ("image", "jpeg"): MimeType.IMAGE_JPEG,
    ("image", "jpg"): MimeType.IMAGE_JPEG,
    ("image", "gif"): MimeType.IMAGE_GIF,
    ("image", "webp"): MimeType.IMAGE_WEBP,
    ("image", "bmp"): MimeType.IMAGE_BMP,
    ("image", "tiff"): MimeType.IMAGE_TIFF,
    ("image", "tif"): MimeType.IMAGE_TIFF,
    ("application", "pdf"): MimeType.APPLICATION_PDF,
    ("application", "msword"): MimeType.APPLICATION_MSWORD,
    (
        "application",
        "vnd.openxmlformats-officedocument.wordprocessingml.document",
    ): MimeType.APPLICATION_DOCX,
    ("application", "vnd.oasis.opendocument.text"): MimeType.APPLICATION_ODT,
    ("text", "plain"): MimeType.TEXT_PLAIN,
    ("text", "html"): MimeType.TEXT_HTML,
    ("text", "css"): MimeType.TEXT_CSS,
    ("text", "javascript"): MimeType.TEXT_JAVASCRIPT,
    ("application", "javascript"): MimeType.TEXT_JAVASCRIPT,
    ("text", "csv"): MimeType.TEXT_CSV,
    ("text", "markdown"): MimeType.TEXT_MARKDOWN,
    ("text", "md"): MimeType.TEXT_MARKDOWN,
    ("audio", "mpeg"): MimeType.AUDIO_MPEG,
    ("audio", "mp3"): MimeType.AUDIO_MPEG,
    ("audio", "wav"): MimeType.AUDIO_WAV,
    ("audio", "ogg"): MimeType.AUDIO_OGG,
    ("audio", "flac"): MimeType.AUDIO_FLAC,
    ("video", "mp4"): MimeType.VIDEO_MP4,
    ("video", "webm"): MimeType.VIDEO_WEBM,
    ("video", "mpeg"): MimeType.VIDEO_MPEG,
    ("video", "x-msvideo"): MimeType.VIDEO_AVI,
    ("video", "avi"): MimeType.VIDEO_AVI,
    ("application", "json"): MimeType.APPLICATION_JSON,
    ("application", "xml"): MimeType.APPLICATION_XML,
    ("text", "xml"): MimeType.APPLICATION_XML,
    ("application", "zip"): MimeType.APPLICATION_ZIP,
    ("application", "gzip"): MimeType.APPLICATION_GZIP,
    ("application", "x-gzip"): MimeType.APPLICATION_GZIP,
    ("application", "x-tar"): MimeType.APPLICATION_TAR,
    ("application", "tar"): MimeType.APPLICATION_TAR,
    ("font", "woff"): MimeType.FONT_WOFF,
    ("font", "woff2"): MimeType.FONT_WOFF2,
    ("font", "ttf"): MimeType.FONT_TTF,
    ("application", "font-sfnt"): MimeType.FONT_TTF,
    ("font", "otf"): MimeType.FONT_OTF,
    ("application", "rtf"): MimeType.APPLICATION_RTF,
    ("application", "sql"): MimeType.APPLICATION_SQL,
    ("application", "x-yaml"): MimeType.APPLICATION_YAML,
    ("text", "yaml"): MimeType.APPLICATION_YAML,
}


def get_extension(mime_type: MimeType | int) -> str:
    """File extension for a MIME code; unknown codes map to 'bin'."""
    try:
        code = MimeType(mime_type)
    except ValueError:
        code = MimeType.UNKNOWN
    return _EXTENSIONS[code]


def default_octet() -> str:
    """The generic binary MIME type."""
    return "application/octet-stream"


def mime_to_type(mime: str) -> MimeType:
    """Map a MIME type string (parameters allowed) to its code."""
    essence = mime.split(";", 1)[0].strip()
    top, sep, sub = essence.partition("/")
    if not sep or not top or not sub:
        raise ValueError(f"invalid MIME type: {mime!r}")
    # A structured-syntax suffix such as "+xml" is not part of the subtype.
    sub = sub.split("+", 1)[0]
    return _TYPES.get((top.lower(), sub.lower()), MimeType.UNKNOWN)