"""
sdf_entities.py

Defines the SDFormat entity classes (Document, Model, Include, Plugin, Frame, Link,
Joint, Gripper, GraspCheck, World, Actor, Light).
Entities are immutable values: they hold their fields and nothing else. Mapping to
and from XML is driven by the field rules declared here and read by sdf_reader and
sdf_writer. Use dataclasses.replace() to derive a modified copy.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .sdf_common import DEFAULT_SDF_VERSION
from .sdf_pose import Pose
from .sdf_schema import ValueKind, attribute, child, children, element, sdf_element

# --- Leaf Entities ---

@sdf_element("plugin")
@dataclass(frozen=True)
class Plugin:
    """
    A dynamically loaded extension attached to a world, model or sensor.
    Loading the library named by filename is up to the host application.
    """
    name: str = attribute(required=True)  # unique among siblings
    filename: str = attribute(required=True)


@sdf_element("frame")
@dataclass(frozen=True)
class Frame:
    """A named frame of reference that poses can be expressed in."""
    name: str = attribute(required=True)
    # Link, model or frame name; chains of frames must end at a link, model or the world.
    attached_to: Optional[str] = attribute()
    pose: Optional[Pose] = element(kind=ValueKind.POSE)


@sdf_element("link")
@dataclass(frozen=True)
class Link:
    """A rigid body of a model. Inertial, collision and visual data are not modelled yet."""
    name: str = attribute(required=True)


@sdf_element("joint")
@dataclass(frozen=True)
class Joint:
    """Connects two links. Placeholder: joint content is not modelled yet."""


@sdf_element("grasp_check")
@dataclass(frozen=True)
class GraspCheck:
    detach_step: Optional[int] = element(kind=ValueKind.INT, default=40, aliases=("detach_steps",))
    attach_step: Optional[int] = element(kind=ValueKind.INT, default=20, aliases=("attach_steps",))
    min_contact_count: Optional[int] = element(kind=ValueKind.UINT, default=2)


@sdf_element("gripper")
@dataclass(frozen=True)
class Gripper:
    name: str = attribute(required=True)
    grasp_check: Optional[GraspCheck] = child(GraspCheck)
    gripper_link: Optional[str] = element()
    palm_link: Optional[str] = element()


# --- Composite Entities ---

@sdf_element("include")
@dataclass(frozen=True)
class Include:
    """
    Pulls in a model, light or actor from a URI (a file, or a directory laid out
    like a model database entry). The optional fields override values of the
    included resource. placement_frame requires pose to be set as well.
    """
    uri: str = element(required=True)
    name: Optional[str] = element()
    is_static: Optional[bool] = element("static", kind=ValueKind.BOOL)
    placement_frame: Optional[str] = element()
    pose: Optional[Pose] = element(kind=ValueKind.POSE)
    plugins: Tuple[Plugin, ...] = children(Plugin, "plugin")


@sdf_element("model")
@dataclass(frozen=True)
class Model:
    """
    A complete robot or any other physical object.

    canonical_link: link the model frame is attached to. Unset means the first
        link declared, which consumers resolve.
    placement_frame: frame whose pose is set by the model's pose instead of the model frame.
    is_static: immovable model. Unset is treated as false by consumers.
    self_collide: links of the model collide with each other (except jointed pairs).
    allow_auto_disable: the physics engine may skip updating the model at rest. Defaults to true.
    enable_wind: links are affected by wind. Defaults to false.
    """
    name: str = attribute(required=True)
    canonical_link: Optional[str] = attribute()
    placement_frame: Optional[str] = attribute()
    is_static: Optional[bool] = element("static", kind=ValueKind.BOOL)
    self_collide: Optional[bool] = element(kind=ValueKind.BOOL)
    allow_auto_disable: Optional[bool] = element(kind=ValueKind.BOOL, default=True)
    enable_wind: Optional[bool] = element(kind=ValueKind.BOOL, default=False)
    pose: Optional[Pose] = element(kind=ValueKind.POSE)
    includes: Tuple[Include, ...] = children(Include, "include")
    models: Tuple["Model", ...] = children("Model", "model")
    frames: Tuple[Frame, ...] = children(Frame, "frame")
    links: Tuple[Link, ...] = children(Link, "link")
    joints: Tuple[Joint, ...] = children(Joint, "joint")
    plugins: Tuple[Plugin, ...] = children(Plugin, "plugin")
    grippers: Tuple[Gripper, ...] = children(Gripper, "gripper")


# Nested <model> elements are full models
NestedModel = Model


# --- Top-level Placeholders ---

@sdf_element("world")
@dataclass(frozen=True)
class World:
    """An entire world: models, scene, physics and plugins. Not modelled yet."""


@sdf_element("actor")
@dataclass(frozen=True)
class Actor:
    """A model with scripted motion. Not modelled yet."""


@sdf_element("light")
@dataclass(frozen=True)
class Light:
    """A light source. Not modelled yet."""


SdfContent = Union[World, Model, Actor, Light]
CONTENT_TYPES = (World, Model, Actor, Light)


# --- Root ---

@sdf_element("sdf")
@dataclass(frozen=True)
class Document:
    """
    Root of an SDFormat document. Holds exactly one world, model, actor or light;
    the choice is a single field, so there is no way to hold none or several.
    """
    content: SdfContent
    version: str = attribute(default=DEFAULT_SDF_VERSION)

    def __post_init__(self):
        if not isinstance(self.content, CONTENT_TYPES):
            raise TypeError(f"Document content must be one of World, Model, Actor or Light, "
                            f"not {type(self.content).__name__}")

    @property
    def kind(self) -> str:
        """Tag name of the content: 'world', 'model', 'actor' or 'light'."""
        return self.content.xml_tag
