"""
Apartments module data models.
"""

import base64
import mimetypes
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, Field

from .exceptions import InvalidImageError

ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/webp")
MAX_IMAGE_BYTES = 10 * 1024 * 1024


def encode_image(path: Union[str, Path]) -> str:
    """
    Read an image file as a data URL.

    Raises:
        InvalidImageError: If the file is missing, not an allowed type or larger than 10 MB
    """
    path = Path(path)
    mime_type, _ = mimetypes.guess_type(path.name)
    if mime_type not in ALLOWED_IMAGE_TYPES:
        raise InvalidImageError("Image must be a JPEG, PNG or WebP file", str(path))
    try:
        content = path.read_bytes()
    except OSError as e:
        raise InvalidImageError(f"Cannot read image: {e.strerror or e}", str(path)) from e
    if len(content) > MAX_IMAGE_BYTES:
        raise InvalidImageError("Image is larger than 10 MB", str(path))
    return f"data:{mime_type};base64,{base64.b64encode(content).decode('ascii')}"


class ApartmentForm(BaseModel):
    """Values entered on the create/edit apartment form."""

    name: str = ""
    price_for_clean: Optional[Union[float, str]] = Field(None, description="Cleaning price")
    vat: Optional[Union[float, str]] = Field(None, description="VAT rate in percent")
    can_faktura: bool = Field(default=False, description="Whether invoices can be issued")
    picture: Optional[str] = Field(None, description="Existing picture path or URL")
    image_path: Optional[Path] = Field(None, description="Local image file to upload")

    def to_payload(self) -> dict[str, Any]:
        """Body for POST /apartments and PUT /apartments/{id}."""
        payload: dict[str, Any] = {
            "name": self.name.strip(),
            "priceForClean": float(self.price_for_clean),
            "vat": float(self.vat),
            "canFaktura": bool(self.can_faktura),
        }
        if self.image_path is not None:
            payload["image"] = encode_image(self.image_path)
        elif self.picture:
            payload["picture"] = self.picture
        return payload
