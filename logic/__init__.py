"""logic — Game systems package.

Subpackages
-----------
ai/         — perception, wander, behaviour states, enemy controller
combat/     — damage resolution and death impulse

Top-level modules
-----------------
tick            — per-frame system orchestrator
entity_factory  — enemy / target creation from archetype tables
navigation      — minimal navigation agent
animation       — clip timers, triggers, root motion
weapon          — melee weapon + hit notification channel
physics         — rigid bodies, colliders, ragdoll parts
targets         — player avatar and training dummies
"""
