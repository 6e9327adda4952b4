"""
sdf_writer.py

Provides functions to serialize a Document into SDFormat XML text.
Fields are written according to the rules in sdf_schema: None values are omitted,
defaulted fields are always written, collections keep their order.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Any

from .sdf_common import SDF_ROOT_TAG, SdfEncodeError
from .sdf_entities import Document
from .sdf_schema import FieldRule, Location, ValueKind, schema_of

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'


# Raw \r in the output can only come from element text (attribute values are escaped by ElementTree).
def _escape_carriage_returns(text: str) -> str:
    return text.replace("\r", "&#13;")


def _format_scalar(value: Any, rule: FieldRule, path: str) -> str:
    """Converts a field value to its XML text, checking its type."""
    if rule.kind is ValueKind.BOOL:
        if not isinstance(value, bool):
            raise SdfEncodeError(f"{path}: expected a bool, got {type(value).__name__}")
        return str(value).lower()
    if rule.kind in (ValueKind.INT, ValueKind.UINT):
        if not isinstance(value, int) or isinstance(value, bool):
            raise SdfEncodeError(f"{path}: expected an int, got {type(value).__name__}")
        if rule.kind is ValueKind.UINT and value < 0:
            raise SdfEncodeError(f"{path}: expected a non-negative int, got {value}")
        return str(value)
    if not isinstance(value, str):
        raise SdfEncodeError(f"{path}: expected a str, got {type(value).__name__}")
    return value


def _check_entity(value: Any, rule: FieldRule, path: str) -> None:
    if not isinstance(value, rule.entity_type):
        raise SdfEncodeError(f"{path}: expected {rule.entity_type.__name__}, got {type(value).__name__}")


def _build_element(entity: Any, tag: str, path: str) -> ET.Element:
    """Creates the XML element for one entity, recursing into nested entities."""
    elem = ET.Element(tag)
    for rule in schema_of(type(entity)):
        value = getattr(entity, rule.attr)
        field_path = f"{path}/{rule.xml_name}"

        if rule.location is Location.CHILDREN:
            if not isinstance(value, (tuple, list)):
                raise SdfEncodeError(f"{field_path}: expected a tuple of {rule.entity_type.__name__}, "
                                     f"got {type(value).__name__}")
            for index, item in enumerate(value):
                item_path = f"{field_path}[{index}]"
                _check_entity(item, rule, item_path)
                elem.append(_build_element(item, rule.xml_name, item_path))
            continue

        if value is None:
            continue

        if rule.location is Location.ATTRIBUTE:
            elem.set(rule.xml_name, _format_scalar(value, rule, field_path))
        elif rule.location is Location.ELEMENT:
            ET.SubElement(elem, rule.xml_name).text = _format_scalar(value, rule, field_path)
        elif rule.location is Location.CHILD:
            _check_entity(value, rule, field_path)
            elem.append(_build_element(value, rule.xml_name, field_path))
    return elem


def build_xml_tree(document: Document) -> ET.ElementTree:
    """Constructs the XML ElementTree for a Document."""
    if not isinstance(document, Document):
        raise SdfEncodeError(f"expected a Document, got {type(document).__name__}")

    root = _build_element(document, SDF_ROOT_TAG, SDF_ROOT_TAG)
    content = document.content
    root.append(_build_element(content, content.xml_tag, f"{SDF_ROOT_TAG}/{content.xml_tag}"))
    return ET.ElementTree(root)


def encode(document: Document, pretty_print: bool = False, indent: str = "  ",
           xml_declaration: bool = False) -> str:
    """
    Serializes a Document to SDFormat XML text.

    Args:
        document: The Document to write.
        pretty_print: If True, indent nested elements.
        indent: Indentation unit used when pretty printing.
        xml_declaration: If True, start the text with an XML declaration.

    Raises:
        SdfEncodeError: A field holds a value of the wrong type, or serialization failed.
    """
    try:
        tree = build_xml_tree(document)
        if pretty_print:
            ET.indent(tree, space=indent, level=0)
        text = ET.tostring(tree.getroot(), encoding="unicode")
        text = _escape_carriage_returns(text)
    except SdfEncodeError as e:
        logger.error(f"Failed to encode SDF document: {e}")
        raise
    except RecursionError:
        logger.error("Failed to encode SDF document: elements are nested too deeply")
        raise SdfEncodeError("elements are nested too deeply to encode") from None
    except (TypeError, ValueError) as e:
        logger.error(f"Failed to encode SDF document: {e}", exc_info=True)
        raise SdfEncodeError(f"XML serialization failed: {e}") from e

    if xml_declaration:
        text = f"{XML_DECLARATION}\n{text}"
    logger.info(f"Encoded SDF {document.version} document with <{document.kind}> content")
    return text
