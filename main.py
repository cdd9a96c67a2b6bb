"""Entry point — glues pystray (daemon thread) with tkinter (main thread)."""

import ctypes
import logging
import threading
from datetime import date

from calendar_window import CalendarWindow
from date_range import ConfigurationError, DateRange
from icon_gen import create_icon_image
from logging_config import configure_logging
from lunar import solar_to_lunar
from settings import load_settings
from tray_icon import create_tray

logger = logging.getLogger(__name__)


def main() -> None:
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        configure_logging()
        logger.error("Invalid settings: %s", exc)
        raise SystemExit(1) from exc
    configure_logging(verbose=settings["verbose"], log_json=settings["log_json"])

    # DPI awareness so fonts are crisp on Hi-DPI monitors (Windows only)
    try:
        ctypes.windll.shcore.SetProcessDpiAwareness(1)
    except (AttributeError, OSError):
        logger.debug("DPI awareness not available on this platform")

    date_range = DateRange.initial(date.today().year, settings["year_span"])
    lunar = solar_to_lunar if settings["show_lunar"] else None
    cal_win = CalendarWindow(date_range, settings, lunar)

    # Callbacks marshalled onto the tkinter main thread
    def on_show() -> None:
        cal_win.root.after(0, cal_win.toggle)

    def on_exit() -> None:
        def _quit() -> None:
            tray.stop()
            cal_win.root.destroy()
        cal_win.root.after(0, _quit)

    def on_add_year() -> None:
        cal_win.root.after(0, cal_win.add_next_year)

    def on_today() -> None:
        cal_win.root.after(0, cal_win.show)

    icon_image = create_icon_image()
    tray = create_tray(icon_image, on_show, on_exit,
                       on_add_year=on_add_year, on_today=on_today,
                       show_lunar=settings["show_lunar"])

    # Run pystray in a daemon thread so it doesn't block tkinter
    tray_thread = threading.Thread(target=tray.run, daemon=True)
    tray_thread.start()

    cal_win.show()
    # tkinter main loop on the main thread
    cal_win.root.mainloop()


if __name__ == "__main__":
    main()
