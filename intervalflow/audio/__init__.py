"""Audio package — sound cues and spoken announcements."""

from .sounds import SoundManager, SOUND_NAMES, CUE_SOUND
from .speech import Announcer

__all__ = ["SoundManager", "SOUND_NAMES", "CUE_SOUND", "Announcer"]
