"""Root conftest — shared pytest markers.

Markers
-------
unit        fast, no I/O, pure logic
subprocess  spawns a real child process (uses sys.executable)
"""

from __future__ import annotations


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast, no I/O tests")
    config.addinivalue_line("markers", "subprocess: spawns a real child process")
