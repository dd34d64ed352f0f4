# Parameter registry (single source of truth)
# - Every tuning knob of every effect lives here.
# - Effects declare which knobs they use via their `USES` list in fxbehaviors/effects/*.py
#
# Types supported by resolve():
#   float, int, bool, enum, str, colors (list of '#rrggbb', empty = theme colors)

from __future__ import annotations

EASING_CHOICES = [
    "linear", "in_quad", "out_quad", "in_out_quad",
    "in_cubic", "out_cubic", "in_out_cubic", "in_expo", "out_expo",
    "easeIn", "easeOut", "easeInOut",
]
GRADIENT_DIRS = ["horizontal", "vertical", "diagonal", "radial"]

PARAMS: dict[str, dict] = {
    # Shared
    "display":              {"type": "bool",   "default": False},   # True = stop in hold forever
    "final_colors":         {"type": "colors", "default": []},

    # Fire / fire-text
    "fire_ignite_chance":   {"type": "float",  "default": 0.5,  "min": 0.0, "max": 1.0},
    "fire_max_decay":       {"type": "int",    "default": 3,    "min": 0,   "max": 20},
    "fire_hard_limit":      {"type": "float",  "default": 0.1,  "min": 0.0, "max": 0.5},
    "fire_fade_zone":       {"type": "float",  "default": 0.15, "min": 0.0, "max": 0.5},
    "fire_fade_decay":      {"type": "int",    "default": 2,    "min": 0,   "max": 20},
    "fire_min_visible":     {"type": "int",    "default": 5,    "min": 0,   "max": 65},
    "fire_seed_gradient":   {"type": "bool",   "default": False},   # start from a full-field heat ramp

    # Matrix-art
    "matrix_freeze_chance": {"type": "float",  "default": 0.99, "min": 0.0, "max": 1.0},
    "matrix_streak_min":    {"type": "int",    "default": 5,    "min": 1,   "max": 100},
    "matrix_streak_max":    {"type": "int",    "default": 19,   "min": 1,   "max": 100},
    "matrix_speed_min":     {"type": "int",    "default": 1,    "min": 1,   "max": 20},   # ticks per row
    "matrix_speed_max":     {"type": "int",    "default": 3,    "min": 1,   "max": 20},
    "matrix_spawn_chance":  {"type": "float",  "default": 0.5,  "min": 0.0, "max": 1.0},
    "matrix_initial_per_col": {"type": "int",  "default": 3,    "min": 0,   "max": 20},
    "matrix_max_per_col":   {"type": "int",    "default": 6,    "min": 1,   "max": 40},

    # Rain-art
    "rain_freeze_chance":   {"type": "float",  "default": 0.90, "min": 0.0, "max": 1.0},
    "rain_respawn_chance":  {"type": "float",  "default": 0.3,  "min": 0.0, "max": 1.0},
    "rain_speed_min":       {"type": "int",    "default": 1,    "min": 1,   "max": 20},
    "rain_speed_max":       {"type": "int",    "default": 3,    "min": 1,   "max": 20},
    "rain_drop_divisor":    {"type": "int",    "default": 3,    "min": 1,   "max": 20},  # initial drops = width // n
    "rain_max_per_col":     {"type": "int",    "default": 2,    "min": 1,   "max": 20},

    # Beams / beam-text
    "beam_row_symbols":     {"type": "str",    "default": "▂▁_"},
    "beam_col_symbols":     {"type": "str",    "default": "▌▍▎▏"},
    "beam_delay":           {"type": "int",    "default": 2,    "min": 0,   "max": 100},
    "beam_burst_min":       {"type": "int",    "default": 1,    "min": 1,   "max": 50},
    "beam_burst_max":       {"type": "int",    "default": 5,    "min": 1,   "max": 50},
    "beam_row_speed_min":   {"type": "int",    "default": 20,   "min": 1,   "max": 500},  # tenths of a cell per tick
    "beam_row_speed_max":   {"type": "int",    "default": 80,   "min": 1,   "max": 500},
    "beam_col_speed_min":   {"type": "int",    "default": 15,   "min": 1,   "max": 500},
    "beam_col_speed_max":   {"type": "int",    "default": 30,   "min": 1,   "max": 500},
    "beam_gradient_steps":  {"type": "int",    "default": 5,    "min": 1,   "max": 100},
    "beam_gradient_frames": {"type": "int",    "default": 1,    "min": 1,   "max": 50},
    "beam_final_steps":     {"type": "int",    "default": 8,    "min": 1,   "max": 100},
    "beam_final_frames":    {"type": "int",    "default": 1,    "min": 1,   "max": 50},
    "beam_wipe_speed":      {"type": "int",    "default": 3,    "min": 1,   "max": 100},
    "beam_hold_ticks":      {"type": "int",    "default": 100,  "min": 1,   "max": 10000},
    "beam_auto_size":       {"type": "bool",   "default": False},

    # Pour
    "pour_direction":       {"type": "enum",   "default": "down", "choices": ["down", "up", "left", "right"]},
    "pour_speed":           {"type": "int",    "default": 3,    "min": 1,   "max": 100},
    "pour_movement_speed":  {"type": "float",  "default": 0.2,  "min": 0.01, "max": 1.0},
    "pour_gap":             {"type": "int",    "default": 1,    "min": 0,   "max": 100},
    "pour_starting_color":  {"type": "str",    "default": "#ffffff"},
    "pour_final_steps":     {"type": "int",    "default": 12,   "min": 1,   "max": 100},
    "pour_final_frames":    {"type": "int",    "default": 5,    "min": 1,   "max": 50},
    "pour_gradient_direction": {"type": "enum", "default": "horizontal", "choices": ["horizontal", "vertical"]},
    "pour_easing":          {"type": "enum",   "default": "easeIn", "choices": EASING_CHOICES},
    "pour_hold_ticks":      {"type": "int",    "default": 100,  "min": 1,   "max": 10000},

    # Ring-text
    "ring_gap":             {"type": "float",  "default": 0.15, "min": 0.01, "max": 1.0},
    "ring_spin_min":        {"type": "float",  "default": 0.02, "min": 0.0, "max": 1.0},
    "ring_spin_max":        {"type": "float",  "default": 0.08, "min": 0.0, "max": 1.0},
    "ring_static_ticks":    {"type": "int",    "default": 60,   "min": 1,   "max": 10000},
    "ring_disperse_ticks":  {"type": "int",    "default": 60,   "min": 1,   "max": 10000},
    "ring_transition_ticks": {"type": "int",   "default": 30,   "min": 1,   "max": 10000},
    "ring_spin_ticks":      {"type": "int",    "default": 120,  "min": 1,   "max": 10000},
    "ring_spin_cycles":     {"type": "int",    "default": 2,    "min": 1,   "max": 20},
    "ring_final_steps":     {"type": "int",    "default": 12,   "min": 1,   "max": 100},
    "ring_gradient_direction": {"type": "enum", "default": "horizontal", "choices": GRADIENT_DIRS},
    "ring_hold_ticks":      {"type": "int",    "default": 60,   "min": 1,   "max": 10000},

    # Blackhole
    "bh_static_ticks":      {"type": "int",    "default": 60,   "min": 1,   "max": 10000},
    "bh_forming_ticks":     {"type": "int",    "default": 60,   "min": 1,   "max": 10000},
    "bh_consuming_ticks":   {"type": "int",    "default": 90,   "min": 1,   "max": 10000},
    "bh_collapsing_ticks":  {"type": "int",    "default": 40,   "min": 1,   "max": 10000},
    "bh_exploding_ticks":   {"type": "int",    "default": 60,   "min": 1,   "max": 10000},
    "bh_returning_ticks":   {"type": "int",    "default": 80,   "min": 1,   "max": 10000},
    "bh_hold_ticks":        {"type": "int",    "default": 60,   "min": 1,   "max": 10000},
    "bh_radius_ratio":      {"type": "float",  "default": 0.6,  "min": 0.1, "max": 1.0},
    "bh_rotation":          {"type": "float",  "default": 0.2,  "min": 0.0, "max": 2.0},
    "bh_final_steps":       {"type": "int",    "default": 12,   "min": 1,   "max": 100},
    "bh_gradient_direction": {"type": "enum",  "default": "horizontal", "choices": GRADIENT_DIRS},

    # Aquarium
    "aq_fish_interval":     {"type": "int",    "default": 25,   "min": 1,   "max": 10000},
    "aq_fish_max":          {"type": "int",    "default": 30,   "min": 0,   "max": 500},
    "aq_bubble_interval":   {"type": "int",    "default": 15,   "min": 1,   "max": 10000},
    "aq_bubble_max":        {"type": "int",    "default": 40,   "min": 0,   "max": 500},
    "aq_medium_interval":   {"type": "int",    "default": 300,  "min": 1,   "max": 100000},
    "aq_large_interval":    {"type": "int",    "default": 700,  "min": 1,   "max": 100000},
    "aq_mermaid_interval":  {"type": "int",    "default": 2400, "min": 1,   "max": 100000},
    "aq_diver_speed":       {"type": "float",  "default": 0.3,  "min": 0.01, "max": 5.0},
    "aq_boat_speed":        {"type": "float",  "default": 0.4,  "min": 0.01, "max": 5.0},

    # Decrypt
    "decrypt_typing_speed": {"type": "int",    "default": 2,    "min": 1,   "max": 100},
    "decrypt_typing_chance": {"type": "float", "default": 0.75, "min": 0.0, "max": 1.0},
    "decrypt_fast_frames":  {"type": "int",    "default": 80,   "min": 0,   "max": 1000},
    "decrypt_cipher_colors": {"type": "colors", "default": ["#008000", "#00cb00", "#00ff00"]},
    "decrypt_gradient_direction": {"type": "enum", "default": "vertical", "choices": ["horizontal", "vertical"]},
    "decrypt_hold_ticks":   {"type": "int",    "default": 60,   "min": 1,   "max": 10000},

    # Print
    "print_speed":          {"type": "int",    "default": 2,    "min": 1,   "max": 100},
    "print_char_delay":     {"type": "int",    "default": 1,    "min": 1,   "max": 100},   # ticks between bursts
    "print_head_symbol":    {"type": "str",    "default": "█"},
    "print_trail_symbols":  {"type": "str",    "default": "░▒▓"},
    "print_hold_ticks":     {"type": "int",    "default": 60,   "min": 1,   "max": 10000},
}
