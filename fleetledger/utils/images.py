"""
Images encodees en base64 / Base64-encoded images.
Les photos de permis sont stockees en data URI / License photos are stored as data URIs.
"""

import base64
import binascii


def to_data_uri(value: str | None, mime_type: str = "image/jpeg") -> str | None:
    """Normaliser une image base64 en data URI / Normalize a base64 image into a data URI.

    Vide -> None ; deja ``data:`` -> inchange ; sinon le base64 est verifie puis prefixe.
    Empty -> None; already ``data:`` -> unchanged; otherwise the base64 is checked then prefixed.
    """
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if value.startswith("data:"):
        return value
    try:
        base64.b64decode(value, validate=True)
    except binascii.Error as exc:
        raise ValueError("license_image must be base64 or a data URI") from exc
    return f"data:{mime_type};base64,{value}"
