"""data — Tuning file and archetype tables."""
