"""
sdf_schema.py

The field rule table shared by the reader and the writer.

Each entity field declares, next to its dataclass definition, where it lives in
the XML (attribute, text element, nested entity or repeated entities), the XML
name consumers key off, its value type and its defaulting policy:

- REQUIRED:   absent input is a schema mismatch.
- NO_DEFAULT: absent input gives None; None is omitted on output.
- DEFAULTED:  absent input gives a fixed default; always written.
- COLLECTION: absent input gives an empty tuple; never None.

The reader and writer never hard-code field names; they walk schema_of(cls).
"""

import logging
from dataclasses import dataclass, field, fields, is_dataclass, replace
from enum import Enum
from functools import lru_cache
from typing import Any, Callable, Dict, Optional, Tuple, Type, TypeVar, Union

logger = logging.getLogger(__name__)

RULE_KEY = "sdf_rule"

EntityClass = TypeVar("EntityClass", bound=type)

# Tag and class registry, filled by the @sdf_element decorator at import time
_ENTITY_TYPES: Dict[str, type] = {}


class FieldPolicy(Enum):
    REQUIRED = "required"
    NO_DEFAULT = "no_default"
    DEFAULTED = "defaulted"
    COLLECTION = "collection"


class Location(Enum):
    ATTRIBUTE = "attribute"
    ELEMENT = "element"     # <name>text</name>
    CHILD = "child"         # single nested entity
    CHILDREN = "children"   # ordered repeated entities


class ValueKind(Enum):
    STRING = "string"
    BOOL = "bool"
    INT = "int"
    UINT = "uint"
    POSE = "pose"
    ENTITY = "entity"


@dataclass(frozen=True)
class FieldRule:
    """How one dataclass field maps to the XML."""
    location: Location
    policy: FieldPolicy
    kind: ValueKind = ValueKind.STRING
    xml_name: Optional[str] = None     # None: same as the field name
    default: Any = None
    entity_type: Union[str, type, None] = None
    aliases: Tuple[str, ...] = ()      # extra names accepted when reading
    attr: str = ""                     # dataclass field name, filled by schema_of

    @property
    def names(self) -> Tuple[str, ...]:
        return (self.xml_name,) + self.aliases


def _policy_for(required: bool, default: Any) -> FieldPolicy:
    if required:
        return FieldPolicy.REQUIRED
    if default is not None:
        return FieldPolicy.DEFAULTED
    return FieldPolicy.NO_DEFAULT


def _scalar_field(location: Location, name: Optional[str], kind: ValueKind, required: bool,
                  default: Any, aliases: Tuple[str, ...]):
    rule = FieldRule(location=location, policy=_policy_for(required, default), kind=kind,
                     xml_name=name, default=default, aliases=tuple(aliases))
    if required:
        return field(metadata={RULE_KEY: rule})
    return field(default=default, metadata={RULE_KEY: rule})


# --- Field declaration helpers ---

def attribute(name: Optional[str] = None, *, kind: ValueKind = ValueKind.STRING, required: bool = False,
              default: Any = None, aliases: Tuple[str, ...] = ()):
    """Declares a field stored as an XML attribute."""
    return _scalar_field(Location.ATTRIBUTE, name, kind, required, default, aliases)


def element(name: Optional[str] = None, *, kind: ValueKind = ValueKind.STRING, required: bool = False,
            default: Any = None, aliases: Tuple[str, ...] = ()):
    """Declares a field stored as the text of a child element."""
    return _scalar_field(Location.ELEMENT, name, kind, required, default, aliases)


def child(entity: Union[str, type], name: Optional[str] = None):
    """Declares an optional single nested entity."""
    rule = FieldRule(location=Location.CHILD, policy=FieldPolicy.NO_DEFAULT, kind=ValueKind.ENTITY,
                     xml_name=name, entity_type=entity)
    return field(default=None, metadata={RULE_KEY: rule})


def children(entity: Union[str, type], name: Optional[str] = None):
    """Declares an ordered collection of nested entities (a tuple, empty by default)."""
    rule = FieldRule(location=Location.CHILDREN, policy=FieldPolicy.COLLECTION, kind=ValueKind.ENTITY,
                     xml_name=name, entity_type=entity)
    return field(default=(), metadata={RULE_KEY: rule})


def sdf_element(tag: str) -> Callable[[EntityClass], EntityClass]:
    """Class decorator registering an entity and the XML tag it is written as."""
    def register(cls: EntityClass) -> EntityClass:
        cls.xml_tag = tag
        _ENTITY_TYPES[cls.__name__] = cls
        logger.debug(f"Registered SDF entity {cls.__name__} as <{tag}>")
        return cls
    return register


def _resolve_entity(entity: Union[str, type, None]) -> Optional[type]:
    if entity is None or isinstance(entity, type):
        return entity
    try:
        return _ENTITY_TYPES[entity]
    except KeyError:
        raise LookupError(f"Unknown SDF entity type '{entity}'") from None


# --- Table lookups ---

@lru_cache(maxsize=None)
def schema_of(cls: Type) -> Tuple[FieldRule, ...]:
    """Returns the field rules of an entity class in declaration order."""
    if not is_dataclass(cls):
        raise TypeError(f"{cls!r} is not an SDF entity class")
    rules = []
    for f in fields(cls):
        rule = f.metadata.get(RULE_KEY)
        if rule is None:
            continue
        rules.append(replace(rule, attr=f.name, xml_name=rule.xml_name or f.name,
                             entity_type=_resolve_entity(rule.entity_type)))
    return tuple(rules)


def policy_table(cls: Type) -> Dict[str, FieldPolicy]:
    """Field name -> defaulting policy, for auditing an entity's contract."""
    return {rule.attr: rule.policy for rule in schema_of(cls)}


def defaults_of(cls: Type) -> Dict[str, Any]:
    """Field name -> fixed default, for fields with the DEFAULTED policy."""
    return {rule.attr: rule.default for rule in schema_of(cls) if rule.policy is FieldPolicy.DEFAULTED}
