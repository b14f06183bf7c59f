"""Process-wide defaults for listingparser.

Values here are the baseline; a YAML profile loaded through
:func:`listingparser.config.load_config` overrides them per marketplace.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Bullet output
# ---------------------------------------------------------------------------
MAX_BULLETS = 8

# Bullets collected by the relaxed pass when strict filtering yields nothing
FALLBACK_MIN_BULLETS = 4

# Primary bullet source plus this many alternates
MAX_BULLET_SOURCES = 3

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
