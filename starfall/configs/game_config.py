"""
Gameplay configuration for the Starfall simulation
Units: pixels for sizes/positions, pixels per frame for speeds,
milliseconds for every cooldown and interval.
"""

# Playfield (canvas) size
PLAYFIELD_CONFIG = {
    "width": 800,
    "height": 600,
}

# Player template, re-applied on every reset
PLAYER_CONFIG = {
    "player_width": 50,
    "player_height": 50,
    "player_speed": 5.0,
    "player_health": 3,
    "bottom_offset": 50,     # start y = height - bottom_offset
}

# ==============================================================================
# PROJECTILES
# ==============================================================================

PROJECTILE_CONFIG = {
    "bullet_width": 5,
    "bullet_height": 10,
    "bullet_speed": 7.0,
    "enemy_bullet_width": 6,
    "enemy_bullet_height": 6,
}

# ==============================================================================
# ENEMIES
# Speeds, spawn rate and bullet speed come from the difficulty profile.
# ==============================================================================

ENEMY_CONFIG = {
    "min_size": 20,
    "max_size": 50,
}

# ==============================================================================
# SCORING / LEVELING
# ==============================================================================

PROGRESSION_CONFIG = {
    "score_per_kill": 10,
    "first_level_score": 100,    # doubles on every level-up
    "initial_shoot_cooldown": 300.0,
    "cooldown_decrement": 50.0,
    "min_shoot_cooldown": 50.0,
}

# Headless agent environment
ENV_CONFIG = {
    "difficulty": "normal",
    "frame_ms": 1000 / 60,
    "max_steps": 3600,  # 60s at 60 FPS
    "k_enemies": 5,
    "m_bullets": 5,
}

# Arcade window
WINDOW_CONFIG = {
    "title": "Starfall",
    "update_rate": 1 / 60,
    "background": (18, 18, 22),
    "player_color": (0, 255, 0),
    "bullet_color": (255, 255, 0),
    "enemy_color": (220, 80, 80),
    "enemy_bullet_color": (255, 140, 0),
    "hud_color": (220, 220, 220),
}


def build_config(overrides=None):
    """
    Merge the default sections into one flat dict.
    `overrides` may replace any key of any section.
    """
    config = {}
    for section in (PLAYFIELD_CONFIG, PLAYER_CONFIG, PROJECTILE_CONFIG,
                    ENEMY_CONFIG, PROGRESSION_CONFIG):
        config.update(section)
    if overrides:
        unknown = set(overrides) - set(config)
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        config.update(overrides)
    return config
