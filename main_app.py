"""
Orrery - Main Application

Interactive solar system:
- Procedurally textured planets, moons and rings
- Asteroid belt, comet and starfield
- Pointer inspection, cinematic tour, adjustable time scale

Run:
    python main_app.py [--seed N] [--no-audio] [--width W --height H]
"""

import argparse
import sys
from pathlib import Path

import numpy as np
import pygame

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from core.config import WIDTH, HEIGHT, FPS, TITLE, MUSIC_PATH, SimulationConfig
from universe.scene_builder import build_solar_system
from ui.theme import get_theme
from ui.audio import BackgroundMusic
from ui.screen_orrery import OrreryScreen


class OrreryApp:
    """
    Window + frame loop around a single OrreryScreen.

    The scene is built once here; the screen receives it ready-made.
    """

    def __init__(self, width: int = WIDTH, height: int = HEIGHT, fps: int = FPS,
                 seed=None, music_path=MUSIC_PATH, audio: bool = True,
                 config: SimulationConfig = None):
        pygame.init()

        self.fps = fps
        self.windowed_size = (width, height)
        self.fullscreen = False
        self.screen = pygame.display.set_mode(self.windowed_size, pygame.RESIZABLE)
        pygame.display.set_caption(TITLE)
        self.clock = pygame.time.Clock()
        self.theme = get_theme()

        # One generator feeds every procedural choice, so --seed reproduces a scene
        self.config = config or SimulationConfig()
        self.system = build_solar_system(rng=np.random.default_rng(seed),
                                         config=self.config)

        self.orrery = OrreryScreen(self.system, width, height, config=self.config,
                                   music=BackgroundMusic(music_path, enabled=audio))
        self.orrery.on_enter()

        self.running = True
        print(f"\n{TITLE}")
        print("=" * 60)
        print(f"Ready: {width}x{height} @ {fps} FPS"
              + (f", seed {seed}" if seed is not None else ""))
        print("=" * 60)

    # ------------------------------------------------------------------

    def run(self):
        print("\nStarting main loop... (ESC to quit)\n")
        while self.running:
            dt = self.clock.tick(self.fps) / 1000.0
            events = pygame.event.get()
            for event in events:
                self._handle_window_event(event)

            if self.orrery.handle_input(events) == "QUIT":
                self.running = False

            self.orrery.update(dt)
            self.screen.fill(self.theme.colors.BG_DARK)
            self.orrery.render(self.screen)
            pygame.display.flip()

        self.quit()

    def _handle_window_event(self, event: pygame.event.Event):
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN and event.key == pygame.K_F11:
            self.toggle_fullscreen()
        elif event.type == pygame.VIDEORESIZE:
            self.handle_resize(event.w, event.h)

    def toggle_fullscreen(self):
        """F11: desktop-sized fullscreen ⇄ last windowed size"""
        self.fullscreen = not self.fullscreen
        if self.fullscreen:
            info = pygame.display.Info()
            size = (info.current_w, info.current_h)
            self.screen = pygame.display.set_mode(size, pygame.FULLSCREEN)
            print(f"Switched to fullscreen: {size[0]}x{size[1]}")
        else:
            size = self.windowed_size
            self.screen = pygame.display.set_mode(size, pygame.RESIZABLE)
            print(f"Switched to windowed: {size[0]}x{size[1]}")
        self.orrery.on_resize(*size)

    def handle_resize(self, width: int, height: int):
        """Display surface and camera viewport change in the same call"""
        if self.fullscreen:
            return
        self.windowed_size = (width, height)
        self.screen = pygame.display.set_mode(self.windowed_size, pygame.RESIZABLE)
        self.orrery.on_resize(width, height)
        print(f"Window resized to: {width}x{height}")

    def quit(self):
        self.orrery.on_exit()
        print("\nShutting down...")
        pygame.quit()
        sys.exit(0)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interactive solar system orrery")
    parser.add_argument("--width", type=int, default=WIDTH, help="window width")
    parser.add_argument("--height", type=int, default=HEIGHT, help="window height")
    parser.add_argument("--fps", type=int, default=FPS, help="frame rate cap")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for textures, start angles and particles")
    parser.add_argument("--no-audio", action="store_true", help="disable music")
    parser.add_argument("--music", type=Path, default=MUSIC_PATH,
                        help="background music file (default: music.mp3)")
    return parser.parse_args(argv)


def main(argv=None):
    """Entry point"""
    args = parse_args(argv)
    try:
        OrreryApp(width=args.width, height=args.height, fps=args.fps,
                  seed=args.seed, music_path=args.music,
                  audio=not args.no_audio).run()
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        pygame.quit()
        sys.exit(0)
    except Exception as e:
        print(f"\n\nFATAL ERROR: {e}")
        import traceback
        traceback.print_exc()
        pygame.quit()
        sys.exit(1)


if __name__ == "__main__":
    main()
