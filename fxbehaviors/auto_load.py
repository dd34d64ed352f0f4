from __future__ import annotations

# Registration rule:
# - Every module in fxbehaviors/effects that sets SHIPPED = True MUST be registered here.
# - Selftest fails if a shipped effect module is present but not registered.

from fxbehaviors.effects.fire import register_fire
from fxbehaviors.effects.fire_text import register_fire_text

from fxbehaviors.effects.matrix import register_matrix
from fxbehaviors.effects.matrix_art import register_matrix_art
from fxbehaviors.effects.rain import register_rain
from fxbehaviors.effects.rain_art import register_rain_art

from fxbehaviors.effects.beams import register_beams
from fxbehaviors.effects.beam_text import register_beam_text
from fxbehaviors.effects.pour import register_pour

from fxbehaviors.effects.ring_text import register_ring_text
from fxbehaviors.effects.blackhole import register_blackhole
from fxbehaviors.effects.decrypt import register_decrypt
from fxbehaviors.effects.print_text import register_print_text

from fxbehaviors.effects.aquarium import register_aquarium


def register_all():
    # Heat
    register_fire()
    register_fire_text()
    # Particles
    register_matrix()
    register_matrix_art()
    register_rain()
    register_rain_art()
    # Groups
    register_beams()
    register_beam_text()
    register_pour()
    # Choreography
    register_ring_text()
    register_blackhole()
    register_decrypt()
    register_print_text()
    # Scenes
    register_aquarium()
