"""
main.py

Demonstrates usage of the sdformat_schema package: decoding a document, deriving
a modified copy and writing it back out.
"""

import logging
from dataclasses import replace

from sdformat_schema import Document, Link, Model, Plugin, configure_logging, decode, encode

# --- Basic Logging Setup ---
configure_logging(logging.DEBUG)

logger = logging.getLogger(__name__)

BOX_MODEL_SDF = """
<?xml version="1.0" ?>
<sdf version="1.8">
    <model name="box">
        <pose>0 0 0.5 0 0 0</pose>
        <static>false</static>
        <self_collide>true</self_collide>
        <link name="body"/>
        <plugin filename="libMyPlugin.so" name="my_plugin"/>
    </model>
</sdf>"""


def run_demo_1():
    """Decodes a model, shows the filled-in defaults and re-encodes it."""
    logger.info("--- Starting Demo 1 ---")
    document = decode(BOX_MODEL_SDF)
    model = document.content
    logger.info(f"Model '{model.name}': static={model.is_static}, self_collide={model.self_collide}, "
                f"allow_auto_disable={model.allow_auto_disable}, enable_wind={model.enable_wind}")
    logger.info(f"Links: {[link.name for link in model.links]}, plugins: {[p.name for p in model.plugins]}")

    print(encode(document, pretty_print=True, xml_declaration=True))
    logger.info("--- Demo 1 Finished ---")


def run_demo_2():
    """Builds a document in code, derives a modified copy and checks the round trip."""
    logger.info("--- Starting Demo 2 ---")
    base = Model(
        name="cart",
        pose="1 0 0 0 0 0",
        links=(Link("chassis"), Link("wheel_left"), Link("wheel_right")),
    )
    # Entities are immutable; replace() derives a new value
    cart = replace(base, plugins=base.plugins + (Plugin("drive", "libDiffDrive.so"),), is_static=False)
    document = Document(cart, version="1.8")

    text = encode(document, pretty_print=True)
    if decode(text) == document:
        logger.info("Round trip preserved the document.")
    else:
        logger.error("Round trip changed the document.")
    print(text)
    logger.info("--- Demo 2 Finished ---")


if __name__ == '__main__':
    run_demo_1()
    print("\n" + "="*60 + "\n") # Separator
    run_demo_2()
