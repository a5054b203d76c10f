"""Game layer: combat resolution, cooldowns, AI, presets and encounter hosts."""
