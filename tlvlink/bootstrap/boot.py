from tlvlink.bootstrap.config.loader import get_cli_args
from tlvlink.bootstrap.deps import get_cp
from tlvlink.core.helpers.logs import setup_logging
from tlvlink.core.helpers.scan import scan
from tlvlink.core.helpers.signals import ShutdownSignals


@scan("tlvlink.bootstrap.handlers")
def main():
    cli = get_cli_args()
    setup_logging(cli.log_level)

    controlplane = get_cp()
    loop = controlplane.loop

    try:
        with ShutdownSignals() as stop_event:
            loop.run_until_complete(controlplane.start(stop_event))
    except KeyboardInterrupt:
        pass
    finally:
        try:
            loop.run_until_complete(loop.shutdown_asyncgens())
            loop.run_until_complete(loop.shutdown_default_executor())
        finally:
            loop.close()


if __name__ == "__main__":
    main()
