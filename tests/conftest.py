import pytest

from main import create_app
from visualgorithm.config import VisualizerConfig
from visualgorithm.graph import Edge, Graph, Node


class FakeClock:
    """Hand-cranked replacement for time.monotonic."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms / 1000.0


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def dijkstra_graph():
    ids = ["A", "B", "C", "D", "E"]
    return Graph(
        nodes=[Node(i) for i in ids],
        edges=[
            Edge("A", "B", 4),
            Edge("A", "D", 2),
            Edge("D", "C", 4),
            Edge("C", "E", 1),
        ],
    )


@pytest.fixture
def disconnected_graph():
    return Graph(
        nodes=[Node("A"), Node("B"), Node("C"), Node("D")],
        edges=[Edge("A", "B"), Edge("C", "D")],
    )


@pytest.fixture
def config():
    return VisualizerConfig(secret_key="test-secret")


@pytest.fixture
def app(config):
    app = create_app(config)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
