import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
src_root = ROOT / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--skip-statistical",
        action="store_true",
        default=False,
        help="skip the sampling tests that draw thousands of random values",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "statistical: marks sampling tests that check rates and frequencies over many draws",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if not config.getoption("--skip-statistical"):
        return

    skip_marker = pytest.mark.skip(reason="Sampling tests disabled (--skip-statistical)")

    for item in items:
        if "statistical" in item.keywords:
            item.add_marker(skip_marker)
