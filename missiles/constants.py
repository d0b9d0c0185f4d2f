from __future__ import annotations

# ==============================================================================
# Host Timing
# ==============================================================================

# The host advances its world in fixed ticks (20 per second).
TICKS_PER_SECOND = 20
TICK_INTERVAL_S = 1.0 / TICKS_PER_SECOND

# Entities older than this are despawned by the host (one minute).
ENTITY_MAX_AGE_TICKS = 1200

# Entities that fall below this height are lost to the void.
VOID_Y = -64.0

# ==============================================================================
# Launch Sequence
# ==============================================================================

# Missiles fired per launch, one every LAUNCH_INTERVAL_TICKS (0.5 s).
MISSILES_PER_LAUNCH = 5
LAUNCH_INTERVAL_TICKS = 10

# Homing update runs every tick, starting on the first heartbeat after launch.
HOMING_PERIOD_TICKS = 1

# ==============================================================================
# Effects
# ==============================================================================

# Trail particles are scattered around the missile by this much on each axis.
TRAIL_SPREAD = (0.2, 0.2, 0.2)
TRAIL_SPEED = 0.01

# Half-width of the block neighbourhood checked for imminent impact.
COLLISION_SCAN_RADIUS = 1

# ==============================================================================
# Command Surface
# ==============================================================================

COMMAND_NAME = "missiles"
PERMISSION_USE = "missiles.use"
USAGE_MESSAGE = "Usage: /missiles [player]"
PLAYER_NOT_FOUND_MESSAGE = "Player not found!"
