"""Top-level package for bitindex."""

import importlib.metadata

from bitindex.api import *  # noqa: F401,F403
from bitindex.presence import (  # noqa: F401
    PresenceSet,
    PresenceSet8,
    PresenceSet16,
    PresenceSet32,
    PresenceSet64,
    PresenceSet128,
)

__version__ = importlib.metadata.version(__name__)
