"""
Background music - best effort.

Playback starts on the first mouse press. A missing file, a missing audio
device, a pygame build without SDL_mixer or an unsupported codec is
reported once and otherwise ignored.
"""

from pathlib import Path
from typing import Optional

import pygame

from core.config import MUSIC_PATH, MUSIC_VOLUME


class BackgroundMusic:
    """Looping music track controlled through pygame.mixer"""

    def __init__(self, path: Optional[Path] = MUSIC_PATH,
                 volume: float = MUSIC_VOLUME, enabled: bool = True):
        self.path = Path(path) if path is not None else None
        self.volume = volume
        self.enabled = enabled and self.path is not None
        self.started = False
        self.failed = False

    def start(self) -> bool:
        """
        Begin looping playback once.

        Returns:
            True if music is playing
        """
        if self.started:
            return True
        if not self.enabled or self.failed:
            return False

        try:
            if not self.path.exists():
                raise FileNotFoundError(f"{self.path} not found")
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            pygame.mixer.music.load(str(self.path))
            pygame.mixer.music.set_volume(self.volume)
            pygame.mixer.music.play(loops=-1)
        except (pygame.error, OSError, NotImplementedError) as e:
            self.failed = True
            print(f"Audio play blocked: {e}")
            return False

        self.started = True
        print(f"Playing {self.path.name}")
        return True

    def stop(self):
        if not self.started:
            return
        self.started = False
        try:
            if pygame.mixer.get_init():
                pygame.mixer.music.stop()
        except (pygame.error, NotImplementedError) as e:
            print(f"Audio stop failed: {e}")
