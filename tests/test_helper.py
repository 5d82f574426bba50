"""Tests for DriverHelper."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest
from conftest import FakeTarget, make_element, make_tab
from DrissionPage import errors as dp_errors
from DrissionPage.common import Keys

from driver_helper.browser.gestures import SIMULATE_HTML5_DRAG_DROP_JS, SIMULATE_MOUSE_DRAG_JS
from driver_helper.config import HelperConfig
from driver_helper.exceptions import (
    DriverNotInitializedError,
    NavigationError,
    NoElementPresentError,
)
from driver_helper.helper import DriverHelper


def _helper(tab: MagicMock | None, **config: object) -> DriverHelper:
    settings: dict[str, object] = {"explicit_timeout": 0.2, "retry_interval": 0.01, "min_sub_timeout": 0.01}
    settings.update(config)
    return DriverHelper(tab, HelperConfig(**settings))  # type: ignore[arg-type]


class TestSession:
    """Tests for the session precondition."""

    def test_missing_session_raises(self) -> None:
        """Polling without a session is a configuration error, not False."""
        helper = _helper(None)

        with pytest.raises(DriverNotInitializedError, match="Driver isn't initialized"):
            helper.wait_until(lambda tab: True)

    def test_session_can_be_bound_later(self) -> None:
        helper = _helper(None)
        helper.session = make_tab()

        assert helper.wait_until(lambda tab: True)

    def test_multi_target_operations_delegate(self) -> None:
        helper = _helper(make_tab())
        a = FakeTarget("a")
        b = FakeTarget("b", present=True)

        assert helper.is_any_element_present(a, b)
        assert helper.return_any_present_element(a, b) is b
        assert helper.any_present_outcome(a, b).index == 1
        assert not helper.all_elements_present(a, b)
        assert helper.all_element_lists_are_not_empty([b])
        with pytest.raises(NoElementPresentError):
            helper.return_any_present_element(a)

    def test_text_presence_uses_target(self) -> None:
        helper = _helper(make_tab())
        assert helper.is_element_with_text_present(FakeTarget("a", text="hello world"), "world")


class TestLookup:
    """Tests for find_element / find_elements."""

    def test_find_element(self) -> None:
        helper = _helper(make_tab({"#user": make_element()}))

        element = helper.find_element("#user", name="User field")

        assert element is not None
        assert element.name == "User field"
        assert element.locator == "#user"

    def test_find_element_missing(self, caplog: pytest.LogCaptureFixture) -> None:
        helper = _helper(make_tab())

        with caplog.at_level(logging.ERROR):
            assert helper.find_element("#user", timeout=0.05) is None
        assert "Element '#user' not found." in caplog.text

    def test_find_elements_named_by_text(self) -> None:
        items = [make_element(text="first"), make_element(text=""), make_element(text="third")]
        helper = _helper(make_tab({"t:li": items}))

        elements = helper.find_elements("t:li")

        assert [e.name for e in elements] == ["first", "undefined", "third"]
        assert [e.index for e in elements] == [1, 2, 3]

    def test_find_elements_none(self) -> None:
        assert _helper(make_tab()).find_elements("t:li", timeout=0.05) == []


class TestNavigation:
    """Tests for URL and title handling."""

    def test_open_relative_url(self) -> None:
        tab = make_tab()
        helper = _helper(tab, base_url="https://shop.example.com")

        helper.open_url("/cart")

        tab.get.assert_called_once_with("https://shop.example.com/cart")

    def test_open_url_decrypts_tokens(self, caplog: pytest.LogCaptureFixture) -> None:
        tab = make_tab()
        helper = DriverHelper(tab, HelperConfig(), decryptor=lambda payload: payload.upper())

        with caplog.at_level(logging.INFO):
            helper.open_url("https://example.com/?token={crypt:abc}")

        tab.get.assert_called_once_with("https://example.com/?token=ABC")
        # the encrypted form is what gets logged
        assert "{crypt:abc}" in caplog.text

    def test_open_url_accepts_blocking_alert(self) -> None:
        tab = make_tab()
        tab.get.side_effect = dp_errors.AlertExistsError()

        _helper(tab).open_url("https://example.com")

        tab.handle_alert.assert_called_once_with(accept=True)

    def test_is_url_as_expected(self) -> None:
        helper = _helper(make_tab(url="https://example.com/orders/17?tab=1"))

        assert helper.is_url_as_expected("http://example.com/orders/{ignore}")
        assert not helper.is_url_as_expected("https://example.com/invoices/17")

    def test_is_title_as_expected(self) -> None:
        helper = _helper(make_tab(title="Checkout - Shop"))

        assert helper.is_title_as_expected("Checkout")
        assert not helper.is_title_as_expected("Login", timeout=0.05)

    def test_is_title_as_expected_pattern(self) -> None:
        helper = _helper(make_tab(title="Order #1234 confirmed"))

        assert helper.is_title_as_expected_pattern(r"Order #\d+")
        assert not helper.is_title_as_expected_pattern(r"^Invoice")

    def test_is_page_opened(self) -> None:
        helper = _helper(make_tab(url="https://example.com/home/"), base_url="https://example.com")

        assert helper.is_page_opened("/home")
        assert not helper.is_page_opened("/away", timeout=0.05)

    def test_back_and_refresh(self) -> None:
        tab = make_tab()
        helper = _helper(tab)

        helper.navigate_back()
        helper.refresh()

        tab.back.assert_called_once_with()
        tab.refresh.assert_called_once_with()

    def test_open_tab(self) -> None:
        tab = make_tab()
        new_tab = MagicMock()
        tab.browser.new_tab.return_value = new_tab

        assert _helper(tab).open_tab("https://example.com/help") is new_tab
        tab.browser.new_tab.assert_called_once_with("https://example.com/help")

    def test_open_tab_failure(self) -> None:
        tab = make_tab()
        tab.browser.new_tab.return_value = None

        with pytest.raises(NavigationError, match="Unable to open tab"):
            _helper(tab).open_tab("https://example.com/help")

    def test_switch_window_rebinds_session(self) -> None:
        tab = make_tab()
        other = MagicMock()
        tab.tab_id = "A"
        tab.browser.tab_ids = ["A", "B"]
        tab.browser.get_tab.return_value = other
        helper = _helper(tab)

        assert helper.switch_window() is other
        assert helper.session is other
        tab.browser.get_tab.assert_called_once_with("B")
        tab.browser.activate_tab.assert_called_once_with(other)

    def test_switch_window_single_tab(self) -> None:
        tab = make_tab()
        tab.tab_id = "A"
        tab.browser.tab_ids = ["A"]
        helper = _helper(tab)

        assert helper.switch_window() is tab

    def test_existing_elements_follow_switched_window(self) -> None:
        """Elements built before switch_window() resolve against the new tab."""
        tab = make_tab()
        popup = make_tab({"#confirm": make_element()})
        tab.tab_id = "A"
        tab.browser.tab_ids = ["A", "B"]
        tab.browser.get_tab.return_value = popup
        helper = _helper(tab)
        confirm = helper.element("#confirm")

        assert not confirm.is_present(0.05)
        helper.switch_window()

        assert confirm.session is popup
        assert confirm.is_present(0.05)

    def test_element_needs_session(self) -> None:
        with pytest.raises(DriverNotInitializedError):
            _helper(None).element("#confirm")


class TestAlerts:
    """Tests for alert handling."""

    def test_accept_alert(self) -> None:
        tab = make_tab()
        tab.handle_alert.return_value = "Are you sure?"

        assert _helper(tab).accept_alert()
        tab.handle_alert.assert_called_once_with(accept=True, timeout=0.2)

    def test_cancel_alert(self) -> None:
        tab = make_tab()
        tab.handle_alert.return_value = "Are you sure?"

        assert _helper(tab).cancel_alert()
        tab.handle_alert.assert_called_once_with(accept=False, timeout=0.2)

    def test_no_alert(self, caplog: pytest.LogCaptureFixture) -> None:
        """A missing alert is logged, never raised."""
        tab = make_tab()
        tab.handle_alert.return_value = False

        with caplog.at_level(logging.ERROR):
            assert not _helper(tab).accept_alert()
        assert "Alert was not accepted." in caplog.text

    def test_is_alert_present(self) -> None:
        tab = make_tab()
        tab.states.has_alert = True
        assert _helper(tab).is_alert_present()


class TestGestures:
    """Tests for drag and drop, slide and key presses."""

    def _tab(self) -> tuple[MagicMock, MagicMock, MagicMock]:
        source = make_element(attrs={"id": "card"}, location=(5, 5))
        target = make_element(attrs={"id": "column"}, location=(120, 48))
        return make_tab({"#card": source, "#column": target}), source, target

    def test_native_drag_and_drop(self) -> None:
        tab, source, target = self._tab()
        helper = _helper(tab)

        assert helper.drag_and_drop(helper.element("#card"), helper.element("#column"))

        tab.actions.hold.assert_called_once_with(source)
        tab.actions.hold.return_value.move_to.assert_called_once_with(target)
        tab.actions.hold.return_value.move_to.return_value.release.assert_called_once_with(target)

    def test_js_drag_and_drop(self) -> None:
        tab, source, _ = self._tab()
        helper = _helper(tab, js_gestures=True)

        assert helper.drag_and_drop(helper.element("#card"), helper.element("#column"))

        tab.run_js.assert_called_once_with(SIMULATE_MOUSE_DRAG_JS, source, 120, 48)
        tab.actions.hold.assert_not_called()

    def test_drag_and_drop_missing_element(self) -> None:
        tab, _, _ = self._tab()
        helper = _helper(tab)

        assert not helper.drag_and_drop(helper.element("#card"), helper.element("#missing"))
        tab.actions.hold.assert_not_called()

    def test_html5_drag_and_drop(self) -> None:
        tab, _, _ = self._tab()
        tab.run_js.return_value = True
        helper = _helper(tab)

        assert helper.drag_and_drop_html5(helper.element("#card"), helper.element("#column"))
        tab.run_js.assert_called_once_with(SIMULATE_HTML5_DRAG_DROP_JS, "#card", "#column")

    def test_html5_drag_and_drop_needs_ids(self) -> None:
        tab = make_tab({"#card": make_element(), "#column": make_element(attrs={"id": "column"})})
        helper = _helper(tab)

        assert not helper.drag_and_drop_html5(helper.element("#card"), helper.element("#column"))
        tab.run_js.assert_not_called()

    def test_slide(self) -> None:
        slider = make_element()
        tab = make_tab({"#slider": slider})
        helper = _helper(tab)

        assert helper.slide(helper.element("#slider"), 40, 0)

        tab.actions.move_to.assert_called_once_with(slider)
        chain = tab.actions.move_to.return_value.hold.return_value
        chain.move.assert_called_once_with(40, 0)

    def test_slide_missing(self) -> None:
        helper = _helper(make_tab())
        assert not helper.slide(helper.element("#slider"), 40, 0)

    def test_press_tab(self) -> None:
        tab = make_tab()
        _helper(tab).press_tab()
        tab.actions.type.assert_called_once_with(Keys.TAB)


class TestScripts:
    """Tests for trigger and perform_ignore_exception."""

    def test_trigger(self) -> None:
        tab = make_tab()
        tab.run_js.return_value = 3

        assert _helper(tab).trigger("return arguments[0] + 1;", 2) == 3
        tab.run_js.assert_called_once_with("return arguments[0] + 1;", 2)

    def test_perform_ignore_exception_retries_once(self) -> None:
        action = MagicMock(side_effect=[ConnectionError("reset"), "ok"])

        assert _helper(make_tab()).perform_ignore_exception(action) == "ok"
        assert action.call_count == 2

    def test_perform_ignore_exception_second_failure_propagates(self) -> None:
        action = MagicMock(side_effect=[dp_errors.PageDisconnectedError(), ConnectionError("again")])

        with pytest.raises(ConnectionError):
            _helper(make_tab()).perform_ignore_exception(action)

    def test_perform_ignore_exception_other_errors_propagate(self) -> None:
        action = MagicMock(side_effect=ValueError("bad"))

        with pytest.raises(ValueError):
            _helper(make_tab()).perform_ignore_exception(action)
        assert action.call_count == 1
