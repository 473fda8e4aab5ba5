"""
Shared constants for the interaction layer.

Button numbers follow DOM MouseEvent.button.
"""

PRIMARY_BUTTON = 0
SECONDARY_BUTTON = 2

# Ticks between two persistence snapshots (one second at 60 fps)
SAVE_INTERVAL_TICKS = 60

# Frames used for the rolling fps estimate
FPS_WINDOW = 60

JITTER_KEY = 'Space'
CLEAR_KEY = 'Backspace'
