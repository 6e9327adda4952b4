"""
sdf_reader.py

Provides decode(), turning SDFormat XML text into a Document.
The element tree is walked with the field rules from sdf_schema: required fields
must be present, defaulted fields are filled in, collections keep document order.
Any problem raises an SdfDecodeError naming the offending path.
"""

import logging
import re
import xml.etree.ElementTree as ET
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Type, Union

from .sdf_common import SDF_ROOT_TAG, MalformedInputError, SchemaMismatchError, SdfDecodeError
from .sdf_entities import CONTENT_TYPES, Document, Include
from .sdf_pose import validate_pose
from .sdf_schema import FieldPolicy, FieldRule, Location, ValueKind, schema_of

logger = logging.getLogger(__name__)

# Mapping from <sdf> child tags to the content classes
CONTENT_TAG_TO_CLASS = {cls.xml_tag: cls for cls in CONTENT_TYPES}

_TRUE_STRINGS = ("true", "1")
_FALSE_STRINGS = ("false", "0")
_INT_PATTERN = re.compile(r"[+-]?\d+")


# --- Value Conversion ---

def _parse_bool(value: str, path: str) -> bool:
    text = value.strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise SchemaMismatchError(f"expected a boolean (true, false, 1 or 0), got '{value}'", path)


def _parse_int(value: str, path: str, unsigned: bool = False) -> int:
    text = value.strip()
    if not _INT_PATTERN.fullmatch(text):
        raise SchemaMismatchError(f"expected an integer, got '{value}'", path)
    number = int(text)
    if unsigned and number < 0:
        raise SchemaMismatchError(f"expected a non-negative integer, got {number}", path)
    return number


def _parse_pose(value: str, path: str) -> str:
    try:
        return validate_pose(value)
    except ValueError as e:
        raise SchemaMismatchError(str(e), path) from None


def _convert(value: str, rule: FieldRule, path: str) -> Any:
    if rule.kind is ValueKind.BOOL:
        return _parse_bool(value, path)
    if rule.kind is ValueKind.INT:
        return _parse_int(value, path)
    if rule.kind is ValueKind.UINT:
        return _parse_int(value, path, unsigned=True)
    if rule.kind is ValueKind.POSE:
        return _parse_pose(value, path)
    return value.strip()


# --- Element Lookup ---

def _describe(elem: ET.Element, index: int) -> str:
    """Path segment for a repeated element: its name if it has one, else its position."""
    name = elem.get("name")
    return f"{elem.tag}[{name}]" if name else f"{elem.tag}[{index}]"


def _children_named(elem: ET.Element, names: Sequence[str]) -> List[ET.Element]:
    return [c for c in elem if c.tag in names]


def _single_child(elem: ET.Element, rule: FieldRule, path: str) -> Optional[ET.Element]:
    matches = _children_named(elem, rule.names)
    if len(matches) > 1:
        raise SchemaMismatchError(f"<{rule.xml_name}> may appear only once, found {len(matches)}", path)
    return matches[0] if matches else None


def _attribute_value(elem: ET.Element, rule: FieldRule, path: str) -> Optional[Tuple[str, str]]:
    for name in rule.names:
        if name in elem.attrib:
            return elem.attrib[name], f"{path}/@{name}"
    return None


def _element_value(elem: ET.Element, rule: FieldRule, path: str) -> Optional[Tuple[str, str]]:
    match = _single_child(elem, rule, path)
    if match is None:
        return None
    return match.text or "", f"{path}/{match.tag}"


def _find_scalar(elem: ET.Element, rule: FieldRule, path: str) -> Optional[Tuple[str, str]]:
    """Looks in the declared place first, then accepts the other form (attribute <-> element)."""
    if rule.location is Location.ATTRIBUTE:
        lookups = (_attribute_value, _element_value)
    else:
        lookups = (_element_value, _attribute_value)
    for lookup in lookups:
        found = lookup(elem, rule, path)
        if found is not None:
            return found
    return None


def _log_unknown(elem: ET.Element, rules: Sequence[FieldRule], path: str,
                 extra_known: Sequence[str] = ()) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    known = {name for rule in rules for name in rule.names}.union(extra_known)
    for name in elem.attrib:
        if name not in known:
            logger.debug(f"Ignoring unsupported attribute '{name}' at {path}")
    for sub in elem:
        if sub.tag not in known:
            logger.debug(f"Ignoring unsupported element <{sub.tag}> at {path}")


# --- Cross-field Constraints ---

def _check_include(values: Dict[str, Any], path: str) -> None:
    if values.get("placement_frame") is not None and values.get("pose") is None:
        raise SchemaMismatchError("placement_frame is set but pose is missing", path)


CONSTRAINTS: Dict[Type, Callable[[Dict[str, Any], str], None]] = {
    Include: _check_include,
}


# --- Entity Reconstruction ---

def _read_fields(cls: Type, elem: ET.Element, path: str, extra_known: Sequence[str] = ()) -> Dict[str, Any]:
    """Builds the constructor arguments of cls from elem, applying each field's policy."""
    rules = schema_of(cls)
    values: Dict[str, Any] = {}
    for rule in rules:
        if rule.location is Location.CHILDREN:
            values[rule.attr] = tuple(
                _decode_entity(rule.entity_type, sub, f"{path}/{_describe(sub, index)}")
                for index, sub in enumerate(_children_named(elem, rule.names))
            )
        elif rule.location is Location.CHILD:
            sub = _single_child(elem, rule, path)
            values[rule.attr] = _decode_entity(rule.entity_type, sub, f"{path}/{sub.tag}") if sub is not None else None
        else:
            found = _find_scalar(elem, rule, path)
            if found is not None:
                raw, value_path = found
                values[rule.attr] = _convert(raw, rule, value_path)
            elif rule.policy is FieldPolicy.REQUIRED:
                raise SchemaMismatchError(f"missing required {rule.location.value} '{rule.xml_name}'", path)
            else:
                # DEFAULTED fills the default, NO_DEFAULT stays None
                values[rule.attr] = rule.default
    _log_unknown(elem, rules, path, extra_known)
    return values


def _decode_entity(cls: Type, elem: ET.Element, path: str) -> Any:
    values = _read_fields(cls, elem, path)
    check = CONSTRAINTS.get(cls)
    if check is not None:
        check(values, path)
    logger.debug(f"Read {cls.__name__} at {path}")
    return cls(**values)


def decode_element(root: ET.Element) -> Document:
    """
    Reconstructs a Document from an already parsed <sdf> element.

    Raises:
        SchemaMismatchError: wrong root tag, no or several world/model/actor/light
            children, a missing required field or an unconvertible value.
    """
    if root.tag != SDF_ROOT_TAG:
        raise SchemaMismatchError(f"root element must be <{SDF_ROOT_TAG}>, found <{root.tag}>", root.tag)

    try:
        return _decode_root(root)
    except RecursionError:
        raise SchemaMismatchError("elements are nested too deeply to decode", SDF_ROOT_TAG) from None


def _decode_root(root: ET.Element) -> Document:
    path = SDF_ROOT_TAG
    values = _read_fields(Document, root, path, extra_known=tuple(CONTENT_TAG_TO_CLASS))

    candidates = [sub for sub in root if sub.tag in CONTENT_TAG_TO_CLASS]
    if not candidates:
        raise SchemaMismatchError(
            f"expected one of <{'>, <'.join(CONTENT_TAG_TO_CLASS)}>, found none", path)
    if len(candidates) > 1:
        found = ", ".join(f"<{sub.tag}>" for sub in candidates)
        raise SchemaMismatchError(f"expected exactly one of world, model, actor or light, found {found}", path)

    content_elem = candidates[0]
    content_cls = CONTENT_TAG_TO_CLASS[content_elem.tag]
    values["content"] = _decode_entity(content_cls, content_elem, f"{path}/{_describe(content_elem, 0)}")
    return Document(**values)


def _parse_text(text: Union[str, bytes]) -> ET.Element:
    if not isinstance(text, (str, bytes)):
        raise TypeError(f"decode() expects str or bytes, not {type(text).__name__}")
    try:
        # Whitespace before the XML declaration is not allowed by the parser
        return ET.fromstring(text.lstrip())
    except ET.ParseError as e:
        raise MalformedInputError(f"Invalid XML: {e}") from e


def decode(text: Union[str, bytes]) -> Document:
    """
    Decodes SDFormat XML text into a Document.

    Args:
        text: The document text (str, or bytes in the declared encoding).

    Returns:
        The decoded Document.

    Raises:
        MalformedInputError: The text is not well-formed XML.
        SchemaMismatchError: The XML does not fit the schema.
    """
    try:
        document = decode_element(_parse_text(text))
    except SdfDecodeError as e:
        logger.error(f"Failed to decode SDF document: {e}")
        raise
    logger.info(f"Decoded SDF {document.version} document with <{document.kind}> content")
    return document
