"""Writing decoded tape data to a file or to standard output."""

from __future__ import annotations

import sys
from pathlib import Path

from tapedrive import log
from tapedrive.header import MimeType
from tapedrive.mime import get_extension


def _has_extension(filename: str) -> bool:
    name = Path(filename).name
    if not name or name == "..":
        return False
    return name.rfind(".") > 0


def write_output(
    output: str | None, data: bytes, mime_type: MimeType | int
) -> str | None:
    """Write data to `output`, adding an extension from the MIME code if it has none.

    With no output, the data goes to standard output. Returns the file name written.
    """
    data = bytes(data)
    if output is None:
        stream = sys.stdout.buffer
        stream.write(data)
        stream.flush()
        return None

    filename = str(output)
    if not _has_extension(filename):
        filename = f"{filename}.{get_extension(mime_type)}"
    Path(filename).write_bytes(data)

    log.print_divider()
    log.print_message(f"Wrote output to: {filename}")
    return filename