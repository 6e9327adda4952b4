"""Shared SDF snippets for the codec tests."""
from __future__ import annotations

import pytest


BOX_MODEL_SDF = """
            <?xml version="1.0" ?>
                <sdf version="1.8">
                    <model name="box">
                        <pose>0 0 0.5 0 0 0</pose>
                        <static>false</static>
                        <self_collide>true</self_collide>
                    </model>
                </sdf>"""

ROBOT_SDF = """<?xml version="1.0" ?>
<sdf version="1.8">
  <model name="robot" canonical_link="base" placement_frame="mount">
    <static>false</static>
    <allow_auto_disable>false</allow_auto_disable>
    <enable_wind>true</enable_wind>
    <pose>1 2 3 0 0 1.57</pose>
    <include>
      <uri>model://camera</uri>
      <name>front_camera</name>
      <static>true</static>
      <placement_frame>lens</placement_frame>
      <pose>0.2 0 0.1 0 0 0</pose>
      <plugin name="camera_driver" filename="libCameraDriver.so"/>
    </include>
    <model name="arm">
      <link name="upper_arm"/>
      <link name="forearm"/>
      <plugin name="arm_controller" filename="libArmController.so"/>
    </model>
    <frame name="mount" attached_to="base">
      <pose>0 0 0.3 0 0 0</pose>
    </frame>
    <link name="base"/>
    <link name="wheel"/>
    <joint name="wheel_joint" type="revolute">
      <parent>base</parent>
      <child>wheel</child>
    </joint>
    <plugin name="p1" filename="libP1.so"/>
    <plugin name="p2" filename="libP2.so"/>
    <gripper name="hand">
      <grasp_check>
        <detach_steps>30</detach_steps>
        <attach_steps>10</attach_steps>
        <min_contact_count>3</min_contact_count>
      </grasp_check>
      <gripper_link>finger_left</gripper_link>
      <palm_link>palm</palm_link>
    </gripper>
  </model>
</sdf>"""


@pytest.fixture
def box_model_sdf() -> str:
    return BOX_MODEL_SDF


@pytest.fixture
def robot_sdf() -> str:
    return ROBOT_SDF
