import pytest


def by_slow_marker(item):
    # Check if test is marked as slow
    is_slow = 0 if item.get_closest_marker("slow") is None else 1

    # Check if test is integration test
    is_integration = 1 if "integration" in str(item.fspath) else 0

    # Unit tests first, then slow unit tests, then integration tests
    return (is_integration, is_slow)


def pytest_addoption(parser):
    parser.addoption("--slow-last", action="store_true", default=False)


def pytest_collection_modifyitems(items, config):
    if config.getoption("--slow-last"):
        items.sort(key=by_slow_marker)

    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
