import datetime
import io
import logging
import pathlib

import numpy as np
import pytest

LOG_DIR = pathlib.Path(__file__).parent / "test-logs"


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    # Attach the report to the item so fixtures can see the outcome in teardown.
    outcome = yield
    rep = outcome.get_result()
    setattr(item, "rep_" + rep.when, rep)


@pytest.fixture(autouse=True)
def capture_package_logs(request):
    """Capture 'bwdelaunay' logs per test; write them to a file only on failure."""
    pkg = logging.getLogger("bwdelaunay")
    prev_handlers = list(pkg.handlers)
    prev_level = pkg.level
    for h in prev_handlers:
        pkg.removeHandler(h)

    buf = io.StringIO()
    handler = logging.StreamHandler(buf)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    pkg.addHandler(handler)
    pkg.setLevel(logging.DEBUG)

    try:
        yield buf
    finally:
        pkg.removeHandler(handler)
        pkg.setLevel(prev_level)
        for h in prev_handlers:
            pkg.addHandler(h)

        rep = getattr(request.node, "rep_call", None)
        if rep is not None and rep.outcome == "failed":
            LOG_DIR.mkdir(exist_ok=True)
            nodeid = request.node.nodeid.replace("::", "__").replace("/", "_")
            ts = datetime.datetime.now().strftime("%Y%m%dT%H%M%S")
            fname = LOG_DIR / "{}__{}.log".format(nodeid, ts)
            with open(fname, "w", encoding="utf-8") as f:
                f.write("=== Test: {}\n".format(request.node.nodeid))
                f.write("=== Timestamp: {}\n\n".format(ts))
                f.write(buf.getvalue())


@pytest.fixture
def random_points():
    """Factory for reproducible uniform points on a viewer-sized canvas."""
    def _make(n, seed=0, extent=600.0):
        rng = np.random.default_rng(seed)
        return rng.uniform(0.0, extent, size=(n, 2))
    return _make


@pytest.fixture
def unit_square():
    return [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]
