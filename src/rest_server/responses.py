"""HTTP responses carrying XML representations."""

from typing import Any

from fastapi import Response
from lxml import etree

from src.rest_model.xml_codec import MEDIA_TYPE, NAMESPACE, marshal


class XmlResponse(Response):
    media_type = MEDIA_TYPE


def representation_response(representation: Any) -> XmlResponse:
    return XmlResponse(content=marshal(representation))


def error_response(status_code: int, message: str) -> XmlResponse:
    """Build an XML error body: <error><status/><message/></error>."""
    root = etree.Element(f"{{{NAMESPACE}}}error", nsmap={None: NAMESPACE})
    etree.SubElement(root, f"{{{NAMESPACE}}}status").text = str(status_code)
    etree.SubElement(root, f"{{{NAMESPACE}}}message").text = message
    body = etree.tostring(root, xml_declaration=True, encoding="UTF-8", standalone=True)
    return XmlResponse(content=body, status_code=status_code)
