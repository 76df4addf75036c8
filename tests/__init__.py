"""Test package for the vector canvas showcase.

The ``*_core`` modules cover the pure geometry, layout and animation helpers.
The ``*_headless_sim`` modules compose whole frames, either through the
recording renderer or through pygame with the SDL dummy video driver, so no
real window is opened. Run ``pytest`` from the project root.
"""
