"""Browser navigation and gesture module."""

from driver_helper.browser.gestures import (
    drag_and_drop,
    drag_and_drop_html5,
    drag_and_drop_js,
    press_tab,
    slide,
)
from driver_helper.browser.navigation import (
    handle_alert,
    is_alert_present,
    open_tab,
    open_url,
    switch_window,
)

__all__ = [
    "open_url",
    "open_tab",
    "switch_window",
    "is_alert_present",
    "handle_alert",
    "drag_and_drop",
    "drag_and_drop_js",
    "drag_and_drop_html5",
    "slide",
    "press_tab",
]
