"""System-tray icon setup via pystray."""

from datetime import date
from typing import Callable

import pystray
from PIL import Image
from pystray import MenuItem, Menu

from lunar import label_for


def tray_title(today: date, show_lunar: bool = True) -> str:
    title = f"Scroll Calendar – {today.isoformat()}"
    if show_lunar:
        lunar = label_for(today)
        if lunar:
            title += f" ({lunar})"
    return title


def create_tray(
    icon_image: Image.Image,
    on_show: Callable[[], None],
    on_exit: Callable[[], None],
    on_add_year: Callable[[], None] | None = None,
    on_today: Callable[[], None] | None = None,
    show_lunar: bool = True,
) -> pystray.Icon:
    """Build and return a pystray Icon (not yet started)."""
    items: list[MenuItem | Menu] = [
        MenuItem("Show Calendar", lambda _icon, _item: on_show(), default=True),
    ]
    if on_today is not None:
        items.append(MenuItem("Today", lambda _icon, _item: on_today()))
    if on_add_year is not None:
        items.append(MenuItem("Add Next Year", lambda _icon, _item: on_add_year()))
    items.append(Menu.SEPARATOR)
    items.append(MenuItem("Exit", lambda _icon, _item: on_exit()))
    menu = Menu(*items)
    return pystray.Icon(
        "scroll-calendar", icon_image, tray_title(date.today(), show_lunar), menu)
