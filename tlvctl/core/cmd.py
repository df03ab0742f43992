import argparse
import cmd
import shlex
import sys

from tlvctl.core.client import TlvClient
from tlvctl.core.dispatcher import CommandDispatcher
from tlvctl.core.ports.render import Renderer
from tlvlink.core.codec.framing import FrameCodec


def parse_server(value: str) -> tuple[str, int]:
    """Split 'host:port', '[v6addr]:port' or a bare host (port 8080)."""
    if value.startswith("["):
        host, sep, rest = value[1:].partition("]")
        if not sep:
            raise argparse.ArgumentTypeError(f"invalid server address: {value}")
        port = rest[1:] if rest.startswith(":") else "8080"
    elif value.count(":") == 1:
        host, port = value.split(":")
    else:
        host, port = value, "8080"

    if not port.isdigit() or not 0 < int(port) < 65536:
        raise argparse.ArgumentTypeError(f"invalid port in server address: {value}")

    return host, int(port)


class TlvCmd(cmd.Cmd):
    intro = "Entering tlvctl interactive mode. Type 'exit' or 'quit' to leave."
    prompt = "tlvctl> "

    def __init__(
        self,
        renderers: dict[str, Renderer],
        argv: list[str] | None = None,
    ) -> None:
        super().__init__()

        self._argparser = self._argparse()
        self._args = self._argparser.parse_args(argv)
        self._renderer = renderers[self._args.output]
        self._client = self._get_client()
        self._dispatcher = CommandDispatcher()
        self.failed = False

    @property
    def args(self) -> argparse.Namespace:
        return self._args

    @property
    def interactive(self) -> bool:
        return self._args.namespace is None

    def command(self, *arguments: str):
        return self._dispatcher.command(*arguments)

    def close(self) -> None:
        self._client.close()

    def handle(self, *arguments: str) -> None:
        try:
            msg = self._dispatcher.dispatch(
                *arguments,
                client=self._client,
                namespace=self.args
            )
            print(self._renderer.render(msg))
        except Exception as ex:
            self.failed = True
            # The connection is unusable after a failed exchange.
            self._client.close()
            print(f"error: {ex}", file=sys.stderr)

    def do_register(self, line):
        name = line if self.interactive else getattr(self.args, "name", None)
        if not name:
            print("Usage: register <name>")
            return

        self._args.name = name
        self.handle("register")
        self._args.name = None

    def do_list(self, line):
        self.handle("list")

    def do_exit(self, arg):
        return True

    def do_quit(self, arg):
        return True

    def do_EOF(self, arg):
        print()
        return True

    def _get_client(self) -> TlvClient:
        host, port = self._args.server
        codec = FrameCodec(
            length_width=self._args.length_width,
            type_width=self._args.type_width
        )
        self.prompt = f"tlvctl({host}:{port})> "
        return TlvClient(host, port, codec, timeout=self._args.timeout)

    @staticmethod
    def _argparse() -> argparse.ArgumentParser:
        global_opts = argparse.ArgumentParser(
            prog="tlvctl",
            description="Send registration requests to a tlvlink server."
        )
        global_opts.add_argument(
            "--server",
            type=parse_server,
            default=("localhost", 8080),
            help="server address as host:port (default: localhost:8080)"
        )
        global_opts.add_argument(
            "--length-width",
            type=int,
            choices=[1, 2, 4],
            default=1,
            help="width in bytes of the length field, must match the server"
        )
        global_opts.add_argument(
            "--type-width",
            type=int,
            choices=[1, 2],
            default=1,
            help="width in bytes of the type field, must match the server"
        )
        global_opts.add_argument(
            "--timeout",
            type=float,
            default=None,
            help="socket timeout in seconds (default: wait indefinitely)"
        )
        global_opts.add_argument(
            "-o", "--output",
            choices=["yaml", "json"],
            default="yaml"
        )

        sub = global_opts.add_subparsers(dest="namespace")

        register = sub.add_parser("register", help="register a name")
        register.add_argument("name")

        sub.add_parser("list", help="list registered names")

        return global_opts
