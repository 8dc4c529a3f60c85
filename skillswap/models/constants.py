"""Constants for SkillSwap.

This module centralizes limits and default values used throughout the application.
"""

# Swap requests
MAX_MESSAGE_LENGTH = 500

# Reporting
DEFAULT_TOP_SKILLS = 10

# Ratings
MIN_RATING = 0.0
MAX_RATING = 5.0
