"""ui — In-world widgets.

Provides the floating ``HealthBar`` drawn above each enemy.
"""

from ui.hp_bar import HealthBar

__all__ = ["HealthBar"]
