import pytest
import yaml

from tests.fake.fake_transport import FakeTransport
from tlvlink.core.codec.framing import FrameCodec
from tlvlink.infra.msgpack_serializer import MsgPackSerializer


@pytest.fixture
def codec():
    return FrameCodec()


@pytest.fixture
def serializer():
    return MsgPackSerializer()


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def config_file(tmp_path):
    file = tmp_path / "tlvlink.yaml"

    data = {
        "server": {
            "host": "127.0.0.1",
            "port": 9090,
            "backlog": 10,
            "timeout_graceful_shutdown": 1,
            "max_buffer_size": 4096,
        },
        "protocol": {
            "length_width": 2,
        }
    }

    file.write_text(yaml.dump(data))
    return file


@pytest.fixture
def config_env(config_file, monkeypatch):
    monkeypatch.setenv("TEST_TLVLINKCONFIG", str(config_file))
    return config_file
