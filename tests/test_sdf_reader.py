"""Decoding SDFormat text into Documents: defaults, collections, errors."""
from __future__ import annotations

import logging

import pytest

from sdformat_schema import (
    Actor, Document, Frame, GraspCheck, Gripper, Include, Joint, Light, Link, MalformedInputError,
    Model, Plugin, SchemaMismatchError, SdfDecodeError, World, decode,
)


def _model(body: str, attrs: str = 'name="box"') -> Model:
    document = decode(f'<sdf version="1.8"><model {attrs}>{body}</model></sdf>')
    return document.content


def test_box_model_document(box_model_sdf: str) -> None:
    document = decode(box_model_sdf)
    expected = Document(
        version="1.8",
        content=Model(
            name="box",
            canonical_link=None,
            placement_frame=None,
            is_static=False,
            self_collide=True,
            pose="0 0 0.5 0 0 0",
            allow_auto_disable=True,
            enable_wind=False,
            includes=(),
            models=(),
            frames=(),
            links=(),
            joints=(),
            plugins=(),
            grippers=(),
        ),
    )
    assert document == expected


def test_model_with_plugin_keeps_older_version() -> None:
    document = decode("""
        <?xml version="1.0" ?>
        <sdf version="1.5">
            <model name="box">
                <pose>0 0 0.5 0 0 0</pose>
                <static>false</static>
                <plugin filename="libMyPlugin.so" name="my_plugin"/>
            </model>
        </sdf>""")
    assert document.version == "1.5"
    model = document.content
    assert model.self_collide is None
    assert model.allow_auto_disable is True
    assert model.plugins == (Plugin(name="my_plugin", filename="libMyPlugin.so"),)


def test_defaults_are_materialized() -> None:
    document = decode('<sdf><model name="m"/></sdf>')
    assert document.version == "1.8"
    model = document.content
    assert model.allow_auto_disable is True
    assert model.enable_wind is False
    assert model.is_static is None
    assert model.self_collide is None
    assert model.pose is None
    assert model.canonical_link is None


def test_missing_collections_are_empty_tuples() -> None:
    model = _model("")
    for collection in (model.includes, model.models, model.frames, model.links,
                       model.joints, model.plugins, model.grippers):
        assert collection == ()


def test_plugin_order_is_preserved() -> None:
    model = _model('<plugin name="p1" filename="a.so"/><link name="l"/><plugin name="p2" filename="b.so"/>')
    assert [p.name for p in model.plugins] == ["p1", "p2"]


def test_full_robot(robot_sdf: str) -> None:
    model = decode(robot_sdf).content
    assert model.name == "robot"
    assert model.canonical_link == "base"
    assert model.placement_frame == "mount"
    assert model.allow_auto_disable is False
    assert model.enable_wind is True
    assert model.pose == "1 2 3 0 0 1.57"

    assert model.includes == (Include(
        uri="model://camera",
        name="front_camera",
        is_static=True,
        placement_frame="lens",
        pose="0.2 0 0.1 0 0 0",
        plugins=(Plugin("camera_driver", "libCameraDriver.so"),),
    ),)

    arm = model.models[0]
    assert arm.name == "arm"
    assert arm.links == (Link("upper_arm"), Link("forearm"))
    assert arm.allow_auto_disable is True
    assert arm.enable_wind is False

    assert model.frames == (Frame(name="mount", attached_to="base", pose="0 0 0.3 0 0 0"),)
    assert [link.name for link in model.links] == ["base", "wheel"]
    assert model.joints == (Joint(),)
    assert [p.name for p in model.plugins] == ["p1", "p2"]
    assert model.grippers == (Gripper(
        name="hand",
        grasp_check=GraspCheck(detach_step=30, attach_step=10, min_contact_count=3),
        gripper_link="finger_left",
        palm_link="palm",
    ),)


def test_grasp_check_defaults() -> None:
    model = _model('<gripper name="g"><grasp_check/></gripper>')
    assert model.grippers[0].grasp_check == GraspCheck(detach_step=40, attach_step=20, min_contact_count=2)


def test_gripper_without_grasp_check() -> None:
    gripper = _model('<gripper name="g"><palm_link>palm</palm_link></gripper>').grippers[0]
    assert gripper.grasp_check is None
    assert gripper.gripper_link is None
    assert gripper.palm_link == "palm"


@pytest.mark.parametrize("tag, cls", [("world", World), ("actor", Actor), ("light", Light)])
def test_placeholder_content(tag: str, cls: type) -> None:
    document = decode(f'<sdf version="1.7"><{tag} name="x"><anything/></{tag}></sdf>')
    assert document.content == cls()
    assert document.kind == tag


@pytest.mark.parametrize("text, expected", [("true", True), ("1", True), (" TRUE ", True),
                                            ("false", False), ("0", False)])
def test_boolean_spellings(text: str, expected: bool) -> None:
    assert _model(f"<static>{text}</static>").is_static is expected


def test_attribute_and_element_forms_are_both_accepted() -> None:
    model = decode('<sdf><model static="true"><name>box</name><canonical_link>base</canonical_link></model></sdf>').content
    assert model.name == "box"
    assert model.is_static is True
    assert model.canonical_link == "base"


def test_bytes_input() -> None:
    document = decode(b'<?xml version="1.0" encoding="utf-8"?>\n<sdf version="1.6"><light/></sdf>')
    assert document == Document(Light(), version="1.6")


# --- Root shape ---

def test_model_and_world_together_fail() -> None:
    with pytest.raises(SchemaMismatchError) as excinfo:
        decode('<sdf version="1.8"><model name="a"/><world/></sdf>')
    assert excinfo.value.path == "sdf"


def test_no_content_fails() -> None:
    with pytest.raises(SchemaMismatchError, match="found none"):
        decode('<sdf version="1.8"><unknown/></sdf>')


def test_two_models_fail() -> None:
    with pytest.raises(SchemaMismatchError):
        decode('<sdf><model name="a"/><model name="b"/></sdf>')


def test_wrong_root_tag_fails() -> None:
    with pytest.raises(SchemaMismatchError, match="root element must be <sdf>"):
        decode('<robot name="r"><link name="l"/></robot>')


# --- Schema mismatches ---

def test_missing_model_name() -> None:
    with pytest.raises(SchemaMismatchError) as excinfo:
        decode('<sdf><model><link name="l"/></model></sdf>')
    assert excinfo.value.path == "sdf/model[0]"
    assert "'name'" in str(excinfo.value)


def test_missing_plugin_filename() -> None:
    with pytest.raises(SchemaMismatchError) as excinfo:
        _model('<plugin name="p1"/>')
    assert excinfo.value.path == "sdf/model[box]/plugin[p1]"


def test_missing_include_uri() -> None:
    with pytest.raises(SchemaMismatchError, match="'uri'"):
        _model("<include><name>x</name></include>")


def test_non_boolean_value() -> None:
    with pytest.raises(SchemaMismatchError) as excinfo:
        _model("<static>maybe</static>")
    assert excinfo.value.path == "sdf/model[box]/static"
    assert str(excinfo.value).startswith("sdf/model[box]/static: ")


def test_non_integer_value() -> None:
    with pytest.raises(SchemaMismatchError, match="integer"):
        _model('<gripper name="g"><grasp_check><attach_step>2.5</attach_step></grasp_check></gripper>')


def test_negative_contact_count() -> None:
    with pytest.raises(SchemaMismatchError, match="non-negative"):
        _model('<gripper name="g"><grasp_check><min_contact_count>-1</min_contact_count></grasp_check></gripper>')


def test_invalid_pose() -> None:
    with pytest.raises(SchemaMismatchError, match="pose"):
        _model("<pose>1 2 3</pose>")


def test_include_placement_frame_needs_pose() -> None:
    with pytest.raises(SchemaMismatchError, match="placement_frame") as excinfo:
        _model("<include><uri>model://x</uri><placement_frame>f</placement_frame></include>")
    assert excinfo.value.path == "sdf/model[box]/include[0]"


def test_duplicate_scalar_element() -> None:
    with pytest.raises(SchemaMismatchError, match="only once"):
        _model("<static>true</static><static>false</static>")


# --- Malformed input ---

@pytest.mark.parametrize("text", [
    '<sdf version="1.8"><model name="a"></sdf>',
    "",
    "not xml at all",
    b'<sdf version="1.8"><model name="\xff\xfe"/></sdf>',
])
def test_malformed_input(text) -> None:
    with pytest.raises(MalformedInputError):
        decode(text)


def test_decode_errors_share_a_base_class() -> None:
    assert issubclass(MalformedInputError, SdfDecodeError)
    assert issubclass(SchemaMismatchError, SdfDecodeError)


def test_failure_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR, logger="sdformat_schema.sdf_reader"):
        with pytest.raises(SchemaMismatchError):
            decode("<sdf/>")
    assert "Failed to decode SDF document" in caplog.text


def test_unknown_content_is_logged_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="sdformat_schema.sdf_reader"):
        _model('<link name="l"><inertial/></link>')
    assert "Ignoring unsupported element <inertial>" in caplog.text


def test_deep_nesting_is_a_decode_error() -> None:
    depth = 3000
    text = "<sdf>" + '<model name="m">' * depth + "</model>" * depth + "</sdf>"
    with pytest.raises(SchemaMismatchError, match="nested too deeply") as excinfo:
        decode(text)
    assert excinfo.value.path == "sdf"
