"""Configures pytest further: gates the slow round trips and the extreme primality cases."""
import pytest

GATES = {
    "slow": ("--skip-slow", True, "Slow test: needs no --skip-slow option"),
    "extreme": ("--run-extreme", False, "Extreme test: needs --run-extreme option"),
}


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip slower round trip tests")
    parser.addoption("--run-extreme",
                     action="store_true",
                     default=False,
                     help="run primality tests on huge primes, trial division makes them extremely slow")


def pytest_collection_modifyitems(config, items):
    skipdict = {}
    for keyword, (option, skip_when, reason) in GATES.items():
        if config.getoption(option) == skip_when:
            skipdict[keyword] = pytest.mark.skip(reason=reason)
    if not skipdict:
        return
    for item in items:
        for k, v in skipdict.items():
            if k in item.keywords:
                item.add_marker(v)
