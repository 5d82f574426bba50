"""Drag and drop, slider and keyboard gestures."""

from __future__ import annotations

from typing import Any

from DrissionPage.common import Keys

# Dispatches mousedown on arguments[0], then mousemove/mouseup at (arguments[1], arguments[2]).
SIMULATE_MOUSE_DRAG_JS = """
function simulate(el, type, x, y) {
    var evt = new MouseEvent(type, {
        bubbles: true, cancelable: true, view: window,
        screenX: x, screenY: y, clientX: x, clientY: y, button: 0
    });
    el.dispatchEvent(evt);
}
simulate(arguments[0], "mousedown", 0, 0);
simulate(arguments[0], "mousemove", arguments[1], arguments[2]);
simulate(arguments[0], "mouseup", arguments[1], arguments[2]);
"""

# Fires dragstart on the source, then drop and dragend sharing one DataTransfer.
SIMULATE_HTML5_DRAG_DROP_JS = """
var source = document.querySelector(arguments[0]);
var target = document.querySelector(arguments[1]);
if (!source || !target) { return false; }
var data = new DataTransfer();
function fire(el, type) {
    var evt = new DragEvent(type, {bubbles: true, cancelable: true, dataTransfer: data});
    el.dispatchEvent(evt);
}
fire(source, "dragstart");
fire(target, "dragenter");
fire(target, "dragover");
fire(target, "drop");
fire(source, "dragend");
return true;
"""


def drag_and_drop(tab: Any, source: Any, target: Any) -> None:
    """Press on ``source``, move onto ``target`` and release there."""
    tab.actions.hold(source).move_to(target).release(target)


def drag_and_drop_js(tab: Any, source: Any, target: Any) -> None:
    """Drag with synthetic mouse events towards the target's location."""
    x, y = target.rect.location
    tab.run_js(SIMULATE_MOUSE_DRAG_JS, source, int(x), int(y))


def drag_and_drop_html5(tab: Any, source_id: str, target_id: str) -> bool:
    """Simulate an HTML5 drag between two elements identified by id.

    Returns:
        False if either element could not be found in the page.
    """
    return bool(tab.run_js(SIMULATE_HTML5_DRAG_DROP_JS, f"#{source_id}", f"#{target_id}"))


def slide(tab: Any, slider: Any, move_x: int, move_y: int) -> None:
    tab.actions.move_to(slider).hold(slider).move(move_x, move_y).release()


def press_tab(tab: Any) -> None:
    tab.actions.type(Keys.TAB)
