"""scenes — pygame scenes for the arena sandbox.

arena_scene  — one or more enemies vs. a keyboard-driven player
gizmos       — debug drawing of detection radius, sight cone, path
"""
