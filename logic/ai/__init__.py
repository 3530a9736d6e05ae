"""logic/ai — Enemy AI subpackage.

Modules
-------
perception  — Sensor: radius / layer detection, sight cone
wander      — patrol destination picking
states      — EnemyState + the six behaviour states
enemy       — EnemyController, the state machine host
"""
