"""Chart image handling for the TUI and CLI.

Hidden design decisions:
- Charts arrive as base64 PNG, optionally wrapped in a data URL
- Decoded charts are written to files so textual-image can load them
  and so the user keeps a copy after the session ends
- File naming inside the chart directory
"""

import base64
import binascii
from datetime import datetime
from pathlib import Path
from uuid import uuid4

from .config import CHART_FILE_PREFIX

_DATA_URL_MARKER = ";base64,"


class ChartDecodeError(ValueError):
    """The chart payload is not valid base64 image data."""


def decode_chart(chart_image: str) -> bytes:
    """Decode a base64 chart payload to raw image bytes.

    Args:
        chart_image: Base64 text, or a data:image/...;base64,... URL

    Returns:
        The decoded image bytes

    Raises:
        ChartDecodeError: If the payload is empty or not valid base64
    """
    payload = chart_image
    if payload.startswith("data:") and _DATA_URL_MARKER in payload:
        payload = payload.split(_DATA_URL_MARKER, 1)[1]
    payload = "".join(payload.split())

    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ChartDecodeError(f"Chart image is not valid base64: {e}") from e

    if not data:
        raise ChartDecodeError("Chart image is empty")
    return data


def write_chart(chart_image: str, path: str | Path) -> Path:
    """Decode a chart and write it to an exact path.

    Parent directories are created as needed.
    """
    data = decode_chart(chart_image)
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)
    return target


def save_chart(chart_image: str, directory: str | Path) -> Path:
    """Decode a chart and write it under a fresh name in a directory.

    Args:
        chart_image: Base64 chart payload
        directory: Directory collecting the session's charts

    Returns:
        Path of the written PNG file
    """
    stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    name = f"{CHART_FILE_PREFIX}-{stamp}-{uuid4().hex[:8]}.png"
    return write_chart(chart_image, Path(directory) / name)
