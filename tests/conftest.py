import logging

import pytest
from loguru import logger

from nodeio.core.commands import UndoManager
from nodeio.nodegraph.context import TimelineContext
from nodeio.nodegraph.datatypes import DataType
from nodeio.nodegraph.field import Field
from nodeio.nodegraph.node import EffectNode
from nodeio.nodegraph.port import Port


@pytest.fixture
def caplog(caplog):
    """Route loguru records into pytest's caplog."""
    class PropagateHandler(logging.Handler):
        def emit(self, record):
            logging.getLogger(record.name).handle(record)

    handler_id = logger.add(PropagateHandler(), format="{message}")
    yield caplog
    logger.remove(handler_id)


@pytest.fixture
def journal():
    return UndoManager()


@pytest.fixture
def timeline():
    return TimelineContext(playhead=100)


@pytest.fixture
def node(timeline):
    return EffectNode(node_id="effect-1", name="Effect", timeline=timeline)


@pytest.fixture
def scalar_port(node):
    """Input port with one float field holding 3."""
    port = Port(node, "amount", "Amount")
    port.add_accepted_input_type(DataType.FLOAT)
    port.add_field(Field(static_value=3))
    return port


@pytest.fixture
def make_output(timeline):
    def _make(node_id: str, data_type: DataType = DataType.FLOAT) -> Port:
        owner = EffectNode(node_id=node_id, timeline=timeline)
        port = Port(owner, "out", "Output")
        port.set_output_data_type(data_type)
        return port
    return _make


@pytest.fixture
def make_input(timeline):
    def _make(node_id: str, *accepted: DataType) -> Port:
        owner = EffectNode(node_id=node_id, timeline=timeline)
        port = Port(owner, "in", "Input")
        for data_type in accepted or (DataType.FLOAT,):
            port.add_accepted_input_type(data_type)
        return port
    return _make
