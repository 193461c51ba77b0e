"""
Content negotiation and output formatting.

Response bodies are produced either as JSON or as XML depending on the
client's ``Accept`` header.  JSON bodies use the camelCase property
names of the schemas and keep ``null`` values; XML bodies use
PascalCase element names, mark ``None`` values with ``xsi:nil`` and
wrap sequences in an ``ArrayOf<Item>`` root, so a list of ``UserDto``
renders as ``<ArrayOfUserDto><UserDto>...</UserDto></ArrayOfUserDto>``.

When the ``Accept`` header admits neither representation a
``NotAcceptableError`` is raised.  Responses without a body (204 and
HEAD requests) do not go through negotiation at all.
"""

import logging
import re
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Mapping, Optional, Tuple

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

from .errors import NotAcceptableError


logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"
XML_MEDIA_TYPE = "application/xml"

# Order matters: the first entry wins for wildcards and a missing header.
SUPPORTED_MEDIA_TYPES = (JSON_MEDIA_TYPE, XML_MEDIA_TYPE)

XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
ET.register_namespace("xsi", XSI_NAMESPACE)


def _parse_accept(header: str) -> List[Tuple[str, float, int]]:
    """Split an ``Accept`` header into ``(media_range, quality, position)``."""
    ranges: List[Tuple[str, float, int]] = []
    for position, part in enumerate(header.split(",")):
        part = part.strip()
        if not part:
            continue
        media_range, *params = [p.strip() for p in part.split(";")]
        quality = 1.0
        for param in params:
            name, _, value = param.partition("=")
            if name.strip().lower() == "q":
                try:
                    quality = float(value.strip())
                except ValueError:
                    quality = 0.0
        ranges.append((media_range.lower(), quality, position))
    return ranges


def _matches(media_range: str, media_type: str) -> bool:
    if media_range == "*/*":
        return True
    range_type, _, range_subtype = media_range.partition("/")
    main_type, _, subtype = media_type.partition("/")
    if range_subtype == "*":
        return range_type == main_type
    return media_range == media_type


def select_media_type(accept: Optional[str]) -> str:
    """Return the media type to render a body with.

    Candidates are ordered by quality and then by their position in the
    header.  Ranges with ``q=0`` never match.  Raises
    ``NotAcceptableError`` if nothing supported is acceptable.
    """
    if not accept or not accept.strip():
        return SUPPORTED_MEDIA_TYPES[0]
    parsed = _parse_accept(accept)
    refused = {media_range for media_range, quality, _ in parsed if quality <= 0}
    ranges = sorted((r for r in parsed if r[1] > 0), key=lambda r: (-r[1], r[2]))
    for media_range, _, _ in ranges:
        for media_type in SUPPORTED_MEDIA_TYPES:
            if media_type not in refused and _matches(media_range, media_type):
                return media_type
    raise NotAcceptableError(f"None of the requested media types are supported: {accept}")


def _pascal(name: str) -> str:
    return name[:1].upper() + name[1:]


_INVALID_NAME_CHARS = re.compile(r"[^\w.-]")


def _element_name(key: str) -> str:
    """Turn a mapping key such as ``firstName`` or ``/login/0`` into a valid tag."""
    name = _INVALID_NAME_CHARS.sub("_", key.strip("/"))
    if not name or not (name[0].isalpha() or name[0] == "_"):
        name = "_" + name
    return _pascal(name)


def _format_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _fill(element: ET.Element, value: Any, item_tag: str) -> None:
    if value is None:
        element.set(f"{{{XSI_NAMESPACE}}}nil", "true")
    elif isinstance(value, Mapping):
        for key, child_value in value.items():
            child = ET.SubElement(element, _element_name(str(key)))
            _fill(child, child_value, "string")
    elif isinstance(value, (list, tuple)):
        for item in value:
            child = ET.SubElement(element, item_tag)
            _fill(child, item, "string")
    else:
        element.text = _format_scalar(value)


def to_xml(content: Any, root_name: str) -> bytes:
    """Serialise JSON‑compatible ``content`` to an XML document.

    ``root_name`` names the element for a single object or scalar.  For
    a list it names each item and the document root becomes
    ``ArrayOf<root_name>``.
    """
    if isinstance(content, (list, tuple)):
        root = ET.Element(f"ArrayOf{root_name}")
        _fill(root, content, root_name)
    else:
        root = ET.Element(root_name)
        _fill(root, content, "string")
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)


def render(
    request: Request,
    content: Any,
    *,
    root_name: str,
    status_code: int = 200,
    headers: Optional[Dict[str, str]] = None,
    media_type: Optional[str] = None,
) -> Response:
    """Render ``content`` in the representation preferred by the client.

    ``content`` may hold pydantic models; they are dumped by alias so
    the wire names are camelCase.  Routes that change state pass the
    ``media_type`` they negotiated before the change was made.
    """
    if media_type is None:
        media_type = select_media_type(request.headers.get("accept"))
    data = jsonable_encoder(content, by_alias=True)
    if media_type == XML_MEDIA_TYPE:
        return Response(
            content=to_xml(data, root_name),
            status_code=status_code,
            headers=headers,
            media_type=XML_MEDIA_TYPE,
        )
    return JSONResponse(content=data, status_code=status_code, headers=headers)
