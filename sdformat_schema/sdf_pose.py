"""
sdf_pose.py

Pose strings. A pose is kept as the opaque text found in the document
("x y z roll pitch yaw", or "x y z qx qy qz qw" for quaternion poses).
This module only checks the text is well formed; a structured transform
type can replace the Pose alias here without touching the entities.
"""

# Opaque transform text. Default conceptually "0 0 0 0 0 0", not materialized.
Pose = str

EULER_POSE_LEN = 6
QUATERNION_POSE_LEN = 7


def validate_pose(text: str) -> Pose:
    """
    Checks a pose string and returns it with surrounding whitespace removed.

    An empty pose is accepted (the element is present but uses the default).
    Raises ValueError if the text is not 6 or 7 numeric tokens.
    """
    pose = text.strip()
    if not pose:
        return pose
    tokens = pose.split()
    if len(tokens) not in (EULER_POSE_LEN, QUATERNION_POSE_LEN):
        raise ValueError(f"pose needs {EULER_POSE_LEN} or {QUATERNION_POSE_LEN} values, got {len(tokens)}: '{pose}'")
    for token in tokens:
        try:
            float(token)
        except ValueError:
            raise ValueError(f"pose value '{token}' is not a number") from None
    return pose
