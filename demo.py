from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent
SRC_PATH = ROOT / "src"
if SRC_PATH.exists():
    sys.path.insert(0, str(SRC_PATH))

from DrissionPage import Chromium

from driver_helper import DriverHelper, HelperConfig, NoElementPresentError

config = HelperConfig(
    explicit_timeout=15,
    base_url="https://the-internet.herokuapp.com",
)

tab = Chromium().latest_tab
helper = DriverHelper(tab, config)

helper.open_url("/drag_and_drop")
print(f"Page opened: {helper.is_page_opened('/drag_and_drop')}")

column_a = helper.element("#column-a", name="Column A")
column_b = helper.element("#column-b", name="Column B")
print(f"Both columns present: {helper.all_elements_present(column_a, column_b)}")
print(f"Dragged: {helper.drag_and_drop_html5(column_a, column_b)}")

try:
    heading = helper.return_any_present_element(
        helper.element("t:h1", name="Main heading"),
        helper.element("t:h3", name="Section heading"),
    )
    print(f"Heading: {heading.text}")
except NoElementPresentError as e:
    print(f"No heading: {e.message}")
