"""Interactive window that draws the Lorenz attractor point by point."""

from __future__ import annotations

import argparse
import os

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from .lorenz import (  # noqa: E402
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    LorenzParams,
    LorenzSystem,
    to_screen,
)

BACKGROUND = (14, 26, 37)
POINT_COLOR = (17, 253, 169)
PANEL_COLOR = (36, 46, 62)
WIDGET_COLOR = (66, 88, 122)
HANDLE_COLOR = (120, 160, 220)
TEXT_COLOR = (230, 230, 230)

RectLike = "pygame.Rect | tuple[int, int, int, int]"


class Slider:
    """A horizontal slider holding a float between two bounds."""

    def __init__(
        self,
        label: str,
        minimum: float,
        maximum: float,
        value: float,
        rect: pygame.Rect | tuple[int, int, int, int],
    ) -> None:
        if maximum <= minimum:
            raise ValueError("maximum must be greater than minimum")
        self.label = label
        self.minimum = float(minimum)
        self.maximum = float(maximum)
        self.value = float(value)
        self.rect = pygame.Rect(rect)
        self.dragging = False

    def set_from_x(self, x: float) -> float:
        """Set the value from a horizontal pixel position and return it."""
        fraction = (x - self.rect.left) / self.rect.width if self.rect.width else 0.0
        fraction = min(max(fraction, 0.0), 1.0)
        self.value = self.minimum + fraction * (self.maximum - self.minimum)
        return self.value

    def handle_x(self) -> float:
        """Return the pixel position of the slider handle."""
        fraction = (self.value - self.minimum) / (self.maximum - self.minimum)
        fraction = min(max(fraction, 0.0), 1.0)
        return self.rect.left + fraction * self.rect.width


class Button:
    """A clickable labelled rectangle."""

    def __init__(self, label: str, rect: pygame.Rect | tuple[int, int, int, int]) -> None:
        self.label = label
        self.rect = pygame.Rect(rect)

    def hit(self, pos: tuple[int, int]) -> bool:
        """Return True if the position lies inside the button."""
        return bool(self.rect.collidepoint(pos))


class Controller:
    """State of the viewer: the system, the menu widgets and the play flag."""

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT) -> None:
        self.width = width
        self.height = height
        self.params = LorenzParams()
        self.system = LorenzSystem(self.params)
        self.playing = False
        self.needs_clear = True
        self.panel = pygame.Rect(10, 10, 220, 170)
        self.buttons = {
            "Play": Button("Play", (20, 40, 60, 24)),
            "Stop": Button("Stop", (90, 40, 60, 24)),
        }
        self.sliders = {
            "Sigma": Slider("Sigma", 0, 40, self.params.sigma, (20, 90, 150, 16)),
            "Rho": Slider("Rho", 0, 40, self.params.rho, (20, 120, 150, 16)),
            "Beta": Slider("Beta", 0, 40, self.params.beta, (20, 150, 150, 16)),
        }

    def play(self) -> None:
        """Restart the trajectory from its starting point and clear the trail."""
        self.playing = True
        self.system.reset()
        self.needs_clear = True

    def stop(self) -> None:
        """Pause the trajectory."""
        self.playing = False

    def tick(self) -> tuple[float, float] | None:
        """Apply slider values, advance one step if playing, return the screen point."""
        self.params.sigma = self.sliders["Sigma"].value
        self.params.rho = self.sliders["Rho"].value
        self.params.beta = self.sliders["Beta"].value
        if not self.playing:
            return None
        x, _, z = self.system.step()
        return to_screen(x, z, self.width, self.height)

    def _press(self, pos: tuple[int, int]) -> None:
        if self.buttons["Play"].hit(pos):
            self.play()
        elif self.buttons["Stop"].hit(pos):
            self.stop()
        for slider in self.sliders.values():
            if slider.rect.collidepoint(pos):
                slider.dragging = True
                slider.set_from_x(pos[0])

    def _drag(self, pos: tuple[int, int]) -> None:
        for slider in self.sliders.values():
            if slider.dragging:
                slider.set_from_x(pos[0])

    def _release(self) -> None:
        for slider in self.sliders.values():
            slider.dragging = False


def _draw_menu(surface: pygame.Surface, font: pygame.font.Font, controller: Controller) -> None:
    pygame.draw.rect(surface, PANEL_COLOR, controller.panel)
    surface.blit(font.render("Menu", True, TEXT_COLOR), (controller.panel.x + 10, 18))
    for button in controller.buttons.values():
        pygame.draw.rect(surface, WIDGET_COLOR, button.rect)
        label = font.render(button.label, True, TEXT_COLOR)
        surface.blit(label, label.get_rect(center=button.rect.center))
    for slider in controller.sliders.values():
        pygame.draw.rect(surface, WIDGET_COLOR, slider.rect)
        handle = pygame.Rect(0, slider.rect.top, 6, slider.rect.height)
        handle.centerx = int(slider.handle_x())
        pygame.draw.rect(surface, HANDLE_COLOR, handle)
        text = font.render(f"{slider.label} {slider.value:.3f}", True, TEXT_COLOR)
        surface.blit(text, (slider.rect.left, slider.rect.top - 14))


def main(argv: list[str] | None = None) -> int:
    """Open the viewer window and run until it is closed."""
    parser = argparse.ArgumentParser(
        prog="lorenzview", description="Draw the Lorenz attractor interactively."
    )
    parser.parse_args(argv)

    pygame.init()
    try:
        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption("Lorenz Attractor")
        trail = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT))
        font = pygame.font.Font(None, 20)
        clock = pygame.time.Clock()
        controller = Controller(SCREEN_WIDTH, SCREEN_HEIGHT)

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    controller._press(event.pos)
                elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                    controller._release()
                elif event.type == pygame.MOUSEMOTION:
                    controller._drag(event.pos)

            if controller.needs_clear:
                trail.fill(BACKGROUND)
                controller.needs_clear = False

            point = controller.tick()
            if point is not None:
                trail.fill(POINT_COLOR, pygame.Rect(int(point[0]), int(point[1]), 1, 1))

            screen.blit(trail, (0, 0))
            _draw_menu(screen, font, controller)
            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()
    return 0