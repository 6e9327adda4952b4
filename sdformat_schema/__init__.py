"""
SDFormat Schema

Typed, immutable data model for SDFormat simulation descriptions and an XML
codec for it.

Main entry points:
- decode: SDFormat XML text -> Document
- encode: Document -> SDFormat XML text
"""

from .sdf_common import (
    DEFAULT_POSE, DEFAULT_SDF_VERSION,
    MalformedInputError, SchemaMismatchError, SdfDecodeError, SdfEncodeError, SdfError,
    configure_logging,
)
from .sdf_entities import (
    Actor, Document, Frame, GraspCheck, Gripper, Include, Joint, Light, Link, Model,
    NestedModel, Plugin, SdfContent, World,
)
from .sdf_pose import Pose, validate_pose
from .sdf_reader import decode, decode_element
from .sdf_schema import FieldPolicy, policy_table, schema_of
from .sdf_writer import build_xml_tree, encode

# Current package version
__version__ = "0.1.0"
