import sys
from pathlib import Path
import copy
import json
import pytest

# Ensure repo root is on sys.path so `import app...` works in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.lexicons.loader import COMPONENTS, build_lexicons, get_lexicons, load_component  # noqa: E402


def pretty_json(obj) -> str:
    return json.dumps(obj, indent=2, ensure_ascii=False, sort_keys=True)


@pytest.fixture(scope="session")
def lexicons():
    """The shipped v1 lexicons."""
    return get_lexicons()


@pytest.fixture(scope="session")
def sample_transcript() -> str:
    return (ROOT / "sample_data" / "transcript1.txt").read_text(encoding="utf-8")


@pytest.fixture
def raw_tables():
    """Deep copy of the v1 YAML tables, for tests that build modified lexicons."""
    return {c: copy.deepcopy(load_component(c, "v1")) for c in COMPONENTS}


@pytest.fixture
def make_lexicons(raw_tables):
    def _make(**overrides):
        """Build lexicons from v1 with overrides given as component__key=value."""
        tables = copy.deepcopy(raw_tables)
        for name, value in overrides.items():
            component, key = name.split("__", 1)
            tables[component][key] = value
        return build_lexicons(tables, version="test")
    return _make


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Attach request/response payloads into pytest-html report.

    In tests, store payloads like:
      item._api_logs = [{"title": "...", "request": ..., "response": ...}, ...]
    """
    outcome = yield
    rep = outcome.get_result()

    if rep.when != "call":
        return

    api_logs = getattr(item, "_api_logs", None)
    if not api_logs:
        return

    extras = getattr(rep, "extras", [])

    try:
        from pytest_html import extras as html_extras
    except ImportError:
        return

    for entry in api_logs:
        title = entry.get("title", "API Call")
        html = f"""
        <div style="font-family: ui-monospace, SFMono-Regular, Menlo, Monaco, Consolas, monospace;">
          <h4 style="margin:8px 0;">{title}</h4>
          <details style="margin:6px 0;">
            <summary><b>Request</b></summary>
            <pre style="background:#0b1020;color:#cfe3ff;padding:10px;border-radius:8px;overflow:auto;">{pretty_json(entry.get("request", {}))}</pre>
          </details>
          <details style="margin:6px 0;">
            <summary><b>Response</b></summary>
            <pre style="background:#0b1020;color:#cfe3ff;padding:10px;border-radius:8px;overflow:auto;">{pretty_json(entry.get("response", {}))}</pre>
          </details>
        </div>
        """
        extras.append(html_extras.html(html))

    rep.extras = extras
