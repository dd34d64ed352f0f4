"""Engine primitives shared by the effects (not effects themselves)."""
