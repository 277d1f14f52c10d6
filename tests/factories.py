from __future__ import annotations

from typing import List, Tuple

from preftree.model import Category, Group, Setting


def make_group(description: str | None, *labels: str) -> Group:
    return Group.of(*(Setting.of(label) for label in labels), description=description)


def sample_tree() -> Tuple[List[Category], dict]:
    """Small preference tree used across tests.

    General
      Screen (groups: Display[Brightness, Contrast], Scaling[Zoom])
        Colors (settings: Accent, Background)
      Sound
    Advanced (no groups)
    """
    display = make_group("Display", "Brightness", "Contrast")
    scaling = make_group("Scaling", "Zoom")
    colors = Category.of("Colors", Setting.of("Accent"), Setting.of("Background"))
    screen = Category.of("Screen", display, scaling).sub_categories(colors)
    sound = Category.of("Sound", Setting.of("Volume", 50))
    general = Category.of("General").sub_categories(screen, sound).expand()
    advanced = Category.of("Advanced")
    named = {
        "general": general,
        "screen": screen,
        "colors": colors,
        "sound": sound,
        "advanced": advanced,
        "display": display,
        "scaling": scaling,
    }
    return [general, advanced], named
