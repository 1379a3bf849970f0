"""
Runtime settings (override via environment variables):
    CUBEPAINT_TILE_SIZE        (default: 35)    canvas pixels per tile
    CUBEPAINT_GRID_ORIGIN      (default: 20)    canvas offset of tile (0, 0)
    CUBEPAINT_STEP_DELAY_MS    (default: 100)   pause between replayed path steps
    CUBEPAINT_MIN_SWIPE        (default: 30)    shortest swipe that counts, in pixels
    CUBEPAINT_RENDER_SCALE     (default: 8)     PNG pixels per tile
    CUBEPAINT_SESSION_TIMEOUT  (default: 3600)  idle seconds before a session expires
"""

import os

TILE_SIZE = int(os.environ.get("CUBEPAINT_TILE_SIZE", 35))
GRID_ORIGIN = int(os.environ.get("CUBEPAINT_GRID_ORIGIN", 20))
STEP_DELAY_MS = int(os.environ.get("CUBEPAINT_STEP_DELAY_MS", 100))
MIN_SWIPE_DISTANCE = int(os.environ.get("CUBEPAINT_MIN_SWIPE", 30))
RENDER_SCALE = int(os.environ.get("CUBEPAINT_RENDER_SCALE", 8))
SESSION_TIMEOUT = int(os.environ.get("CUBEPAINT_SESSION_TIMEOUT", 3600))
