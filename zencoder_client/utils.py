"""
Utility functions for the Zencoder client.

Covers payload pruning and the JSON / XML encodings used on the wire.
"""

import json
import logging
import xml.etree.ElementTree as ET
from typing import Any, Dict

from .exceptions import DecodeError

logger = logging.getLogger(__name__)

XML_REQUEST_ROOT = "api-request"


def compact(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Drop unset fields from a payload dictionary.

    None, False, empty strings and empty collections are removed; zero is kept.

    Args:
        data: Dictionary to prune

    Returns:
        New dictionary containing only the set fields
    """
    return {
        key: value for key, value in data.items()
        if value is not None and value is not False and value != "" and value != [] and value != {}
    }


def _singular(name: str) -> str:
    if name.endswith('s') and len(name) > 1:
        return name[:-1]
    return "item"


def _xml_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _build_element(parent: ET.Element, name: str, value: Any) -> None:
    element = ET.SubElement(parent, name)
    if isinstance(value, dict):
        for key, child in value.items():
            _build_element(element, key, child)
    elif isinstance(value, (list, tuple)):
        element.set("type", "array")
        for item in value:
            _build_element(element, _singular(name), item)
    else:
        element.text = _xml_text(value)


def encode_payload(data: Dict[str, Any], content_type: str) -> bytes:
    """
    Serialize a request payload for the given content type.

    Args:
        data: Payload dictionary (already pruned)
        content_type: 'application/json' or 'application/xml'

    Returns:
        UTF-8 encoded request body
    """
    if content_type == "application/xml":
        root = ET.Element(XML_REQUEST_ROOT)
        for key, value in data.items():
            _build_element(root, key, value)
        return ET.tostring(root, encoding="utf-8", xml_declaration=True)

    return json.dumps(data, ensure_ascii=False).encode('utf-8')


def _element_value(element: ET.Element) -> Any:
    if element.get("nil") == "true":
        return None

    children = list(element)
    if element.get("type") == "array":
        return [_element_value(child) for child in children]

    if not children:
        text = (element.text or "").strip()
        value_type = element.get("type")
        if value_type == "integer" and text:
            return int(text)
        if value_type == "boolean":
            return text == "true"
        return text

    result: Dict[str, Any] = {}
    for child in children:
        value = _element_value(child)
        if child.tag in result:
            # Repeated siblings collapse into a list
            existing = result[child.tag]
            if not isinstance(existing, list):
                result[child.tag] = [existing]
            result[child.tag].append(value)
        else:
            result[child.tag] = value
    return result


def xml_to_dict(text: str) -> Dict[str, Any]:
    """
    Convert an XML document into a dictionary, dropping the root element.

    Args:
        text: XML document

    Returns:
        Dictionary of the root element's children

    Raises:
        ET.ParseError: If the document is not well-formed
    """
    root = ET.fromstring(text)
    value = _element_value(root)
    if isinstance(value, dict):
        return value
    if isinstance(value, list):
        return {root.tag: value}
    return {root.tag: value} if value else {}


def decode_response(text: str, content_type: str) -> Dict[str, Any]:
    """
    Decode a successful response body into a dictionary.

    Args:
        text: Response body
        content_type: 'application/json' or 'application/xml'

    Returns:
        Decoded document; an empty body yields an empty dictionary

    Raises:
        DecodeError: If the body cannot be decoded into a key-value document
    """
    if not text.strip():
        return {}

    if content_type == "application/xml":
        try:
            return xml_to_dict(text)
        except ET.ParseError as e:
            raise DecodeError(f"Invalid XML in response: {e}", text, content_type) from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Invalid JSON in response: {e}", text, content_type) from e

    if not isinstance(data, dict):
        raise DecodeError(
            f"Expected a JSON object in response, got {type(data).__name__}",
            text,
            content_type
        )
    return data
