import json
from functools import lru_cache

from pydantic import ValidationError

from tlvlink.bootstrap.config.settings import TlvlinkConfig
from tlvlink.core.controlplane import ControlPlane
from tlvlink.core.models.message import MessageType
from tlvlink.core.routing.app import RoutedApplication
from tlvlink.core.service.registration import RegistrationService
from tlvlink.infra.msgpack_serializer import MsgPackSerializer


@lru_cache
def get_cp() -> ControlPlane:
    config = get_config()

    return ControlPlane(
        config=config,
        app=get_app(),
        codec=config.build_codec(),
    )


@lru_cache
def get_app() -> RoutedApplication:
    return RoutedApplication(error_type=MessageType.REGISTRATION_ERROR)


@lru_cache
def get_registrations() -> RegistrationService:
    return RegistrationService(serializer=MsgPackSerializer())


@lru_cache
def get_config() -> TlvlinkConfig:
    try:
        return TlvlinkConfig()
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(part) for part in err['loc'])}: {err['msg']}")
        raise SystemExit("\n".join(msg))
