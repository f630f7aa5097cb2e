"""System-tray icon setup via pystray."""

from datetime import date
from typing import Callable

import pystray
from PIL import Image
from pystray import Menu, MenuItem


def create_tray(
    icon_image: Image.Image,
    on_show: Callable[[], None],
    on_exit: Callable[[], None],
    on_switch_view: Callable[[], None] | None = None,
) -> pystray.Icon:
    """Build and return a pystray Icon (not yet started)."""
    items: list[MenuItem | Menu] = [
        MenuItem("Show Calendar", lambda _icon, _item: on_show(), default=True),
    ]
    if on_switch_view is not None:
        items.append(MenuItem("Switch View", lambda _icon, _item: on_switch_view()))
    items.append(Menu.SEPARATOR)
    items.append(MenuItem("Exit", lambda _icon, _item: on_exit()))
    title = f"Calendar – {date.today().strftime('%d.%m.%Y')}"
    return pystray.Icon("mini-scroll-calendar", icon_image, title, Menu(*items))
