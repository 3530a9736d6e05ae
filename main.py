"""
main.py — Bootstrap

1. Load tuning constants
2. Create the app
3. Push the arena scene (spawns the player and one of each enemy)
4. Run

    python main.py [seed]
"""

import sys
from core import tuning
from core.app import App
from scenes.arena_scene import ArenaScene


def main():
    tuning.load()
    seed = int(sys.argv[1]) if len(sys.argv) > 1 else None

    app = App(title="Enemy Arena", width=960, height=640)
    app.push_scene(ArenaScene(seed=seed))
    app.run()


if __name__ == "__main__":
    main()
