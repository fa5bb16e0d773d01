#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright 2025 Emasoft
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
epub_media.py - Media type and encoding helpers
===============================================

Detects image media types and extensions, recognises and decodes data URIs,
detects right-to-left languages, and turns caller-supplied image
descriptions into ImageObject instances.
"""

from __future__ import annotations

import base64
import binascii
import logging
import mimetypes
from typing import Any, Mapping
from urllib.parse import unquote_to_bytes

from .epub_constants import DATA_URI_RE, IMAGE_EXTENSIONS, RTL_LANGUAGES
from .epub_validation import ValidationError
from .models import BlobImage, ImageObject, InlineImage

logger = logging.getLogger(__name__)


def is_data_uri(value: Any) -> bool:
    """Return True if value is a self-describing data URI string."""
    return isinstance(value, str) and DATA_URI_RE.match(value) is not None


def _data_uri_header(uri: str) -> str:
    return uri.strip().split(",", 1)[0]


def _data_uri_mime(uri: str) -> str:
    header = _data_uri_header(uri)
    return header.split(":", 1)[1].split(";", 1)[0].strip().lower()


def get_mime_type(image_data: Any) -> str:
    """
    Detect the media type of image data.

    Data URIs report the type declared in their header; InlineImage,
    BlobImage and ImageObject report their resolved type. Anything else
    yields an empty string.
    """
    if isinstance(image_data, ImageObject):
        return image_data.mime_type
    if isinstance(image_data, (InlineImage, BlobImage)):
        return image_data.mime_type
    if is_data_uri(image_data):
        return _data_uri_mime(image_data)
    return ""


def get_extension(mime_type: str | None) -> str:
    """Map a known image media type to its dotted extension, else ''."""
    if not mime_type:
        return ""
    return IMAGE_EXTENSIONS.get(mime_type.lower(), "")


def data_uri_to_bytes(uri: str) -> tuple[bytes, str]:
    """
    Decode a data URI into its raw payload.

    Args:
        uri: A data URI such as 'data:image/png;base64,iVBOR...'

    Returns:
        Tuple of (payload bytes, declared media type)

    Raises:
        ValueError: If uri is not a data URI or the payload is corrupt
    """
    if not is_data_uri(uri):
        raise ValueError("Not a data URI")
    header, payload = uri.strip().split(",", 1)
    mime_type = _data_uri_mime(uri)
    if ";base64" in header.lower():
        try:
            data = base64.b64decode("".join(payload.split()))
        except binascii.Error as e:
            raise ValueError(f"Invalid base64 payload: {e}") from e
    else:
        data = unquote_to_bytes(payload)
    return data, mime_type


def is_rtl_language(iso_code: str | None) -> bool:
    """Return True if the ISO language code is written right-to-left."""
    if not iso_code:
        return False
    return iso_code.strip().lower() in RTL_LANGUAGES


def _guess_image_type(name: str) -> str:
    guessed, _ = mimetypes.guess_type(name)
    if guessed and guessed.startswith("image/"):
        return guessed
    return ""


def to_image_object(image: ImageObject | Mapping[str, Any]) -> ImageObject:
    """
    Resolve an image description into an ImageObject.

    The description is a mapping with 'name', 'data' (a data URI string or
    bytes) and an optional declared 'type'. The media type is taken from the
    data URI header, then the declared type, then the file name.

    Raises:
        ValidationError: If the entry is not an image description, or its name,
            data or media type cannot be determined
    """
    if isinstance(image, ImageObject):
        if not image.name.strip():
            raise ValidationError("Image is missing a name", field="name")
        if not image.mime_type:
            raise ValidationError(f"Cannot determine media type of image '{image.name}'", field="type")
        return image
    if not isinstance(image, Mapping):
        raise ValidationError(f"Invalid image entry: {image!r}", field="images")

    name = str(image.get("name") or "").strip()
    if not name:
        raise ValidationError("Image is missing a name", field="name")

    declared = str(image.get("type") or image.get("mime_type") or "").strip().lower()
    data = image.get("data")

    if isinstance(data, str):
        if not is_data_uri(data):
            raise ValidationError(f"Image '{name}' data is not a data URI", field="data")
        mime_type = _data_uri_mime(data) or declared or _guess_image_type(name)
        image_data: InlineImage | BlobImage = InlineImage(uri=data, mime_type=mime_type)
    elif isinstance(data, (bytes, bytearray)):
        mime_type = declared or _guess_image_type(name)
        image_data = BlobImage(data=bytes(data), mime_type=mime_type)
    else:
        raise ValidationError(f"Image '{name}' has no data", field="data")

    if not mime_type:
        raise ValidationError(f"Cannot determine media type of image '{name}'", field="type")

    logger.debug(f"Resolved image {name} as {mime_type}")
    return ImageObject(name=name, data=image_data)
