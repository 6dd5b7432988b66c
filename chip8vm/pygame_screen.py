"""Pygame window frontend."""

import time
from typing import Optional

import pygame

from chip8vm.logging import EmulatorLogger
from chip8vm.rendering import chip8_display_to_rgb, create_color_scheme
from chip8vm.state import EmulatorState
from chip8vm.ui import Screen, consume_frame, press_key, release_key

# Hex keypad on the keys labelled with the same digit
KEY_MAP = {
    pygame.K_0: 0x0, pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3,
    pygame.K_4: 0x4, pygame.K_5: 0x5, pygame.K_6: 0x6, pygame.K_7: 0x7,
    pygame.K_8: 0x8, pygame.K_9: 0x9,
    pygame.K_a: 0xA, pygame.K_b: 0xB, pygame.K_c: 0xC,
    pygame.K_d: 0xD, pygame.K_e: 0xE, pygame.K_f: 0xF,
    pygame.K_UP: 0x2, pygame.K_DOWN: 0x8, pygame.K_LEFT: 0x4, pygame.K_RIGHT: 0x6,
    pygame.K_SPACE: 0x5,
}


def draw_overlay_text(surface, text_lines, position, font, bg_color=(0, 0, 0), text_color=(255, 255, 255), alpha=120):
    """Draw text with semi-transparent background overlay"""
    if not text_lines:
        return

    line_height = font.get_height()
    max_width = max(font.size(line)[0] for line in text_lines)
    overlay = pygame.Surface((max_width + 16, len(text_lines) * line_height + 8))
    overlay.set_alpha(alpha)
    overlay.fill(bg_color)
    surface.blit(overlay, position)

    x, y = position
    for i, line in enumerate(text_lines):
        text_surface = font.render(line, True, text_color)
        surface.blit(text_surface, (x + 8, y + 4 + i * line_height))


class PygameScreen(Screen):
    """Window that runs ``instructions_per_frame`` steps per video frame.

    Controls: ESC quits, P pauses, F1 toggles the register overlay.
    """

    def __init__(
        self,
        state: EmulatorState,
        logger: Optional[EmulatorLogger] = None,
        scale: int = 10,
        fps: int = 60,
        instructions_per_frame: int = 10,
        color_scheme: str = "classic",
    ):
        super().__init__(state, logger)
        self.scale = scale
        self.fps = fps
        self.instructions_per_frame = instructions_per_frame
        self.on_color, self.off_color = create_color_scheme(color_scheme)
        self.show_debug = False
        self.paused = False

    def _window_size(self) -> tuple[int, int]:
        width, height = self.state.resolution
        return width * self.scale, height * self.scale

    def _handle_events(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    return False
                elif event.key == pygame.K_p:
                    self.paused = not self.paused
                elif event.key == pygame.K_F1:
                    self.show_debug = not self.show_debug
                elif event.key in KEY_MAP:
                    self.state = press_key(self.state, KEY_MAP[event.key])
            elif event.type == pygame.KEYUP and event.key in KEY_MAP:
                self.state = release_key(self.state, KEY_MAP[event.key])
        return True

    def _draw(self, surface, display):
        frame = chip8_display_to_rgb(display, self.scale, self.on_color, self.off_color)
        # surfarray expects (width, height, 3)
        pygame.surfarray.blit_array(surface, frame.transpose(1, 0, 2))

        if self.show_debug:
            font = pygame.font.Font(None, 18)
            lines = [
                f"PC: 0x{int(self.state.pc):03X}  I: 0x{int(self.state.I):03X}",
                f"DT: {int(self.state.delay_timer)}  ST: {int(self.state.sound_timer)}",
            ]
            for i in range(0, 16, 8):
                lines.append(" ".join(f"{int(self.state.V[j]):02X}" for j in range(i, i + 8)))
            draw_overlay_text(surface, lines, (5, 5), font, alpha=100)

    def run(self):
        pygame.init()
        surface = pygame.display.set_mode(self._window_size())
        pygame.display.set_caption("chip8vm")
        clock = pygame.time.Clock()
        start = time.time()
        running = True

        try:
            while running:
                clock.tick(self.fps)
                running = self._handle_events()
                if self.paused or not running:
                    continue

                mode = self.state.display_mode
                for _ in range(self.instructions_per_frame):
                    if not self.cycle():
                        running = False
                        break

                if self.state.display_mode != mode:
                    surface = pygame.display.set_mode(self._window_size())

                self.state, display = consume_frame(self.state)
                if display is not None or self.show_debug:
                    self._draw(surface, self.state.display)
                    pygame.display.flip()
        finally:
            pygame.quit()
            self.logger.log_run_summary(time.time() - start)
