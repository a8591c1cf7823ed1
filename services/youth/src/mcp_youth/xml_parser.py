import xml.etree.ElementTree as ET
from typing import Any, Dict

from mcp_youth.errors import ParseError


def _element_value(element: ET.Element) -> Any:
    """
    Convert an element to a plain value.

    Leaf elements become their trimmed text. Elements with children become a
    dict keyed by child tag; a tag seen once maps to its value directly, a tag
    repeated under the same parent maps to a list. Attributes are dropped.
    """
    children = list(element)
    if not children:
        return (element.text or "").strip()

    result: Dict[str, Any] = {}
    for child in children:
        value = _element_value(child)
        if child.tag not in result:
            result[child.tag] = value
        elif isinstance(result[child.tag], list):
            result[child.tag].append(value)
        else:
            result[child.tag] = [result[child.tag], value]
    return result


def parse_xml(text: str) -> Dict[str, Any]:
    """
    Parse an XML document into nested dicts keyed by element tag.

    The root element becomes the only top-level key, so a data.go.kr body
    comes back as {"response": {"header": {...}, "body": {...}}}.

    Raises:
        ParseError: if the text is not well-formed XML.
    """
    if not text or not text.strip():
        raise ParseError("청소년활동정보 API에서 빈 응답을 받았습니다")

    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise ParseError(f"XML 응답을 해석할 수 없습니다: {e}", response=text) from e

    return {root.tag: _element_value(root)}
