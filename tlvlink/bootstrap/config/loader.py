import argparse
import os
from functools import lru_cache
from pathlib import Path


@lru_cache
def get_cli_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tlvlink",
        description=(
            "Start a tlvlink server.\n\n"
            "The server listens for TCP connections and answers registration\n"
            "requests framed as type-length-value messages."
        ),
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Path to a tlvlink configuration file"
    )

    parser.add_argument(
        "-l", "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=(
            "Logging verbosity for the server.\n"
            "DEBUG    → every frame received and sent.\n"
            "INFO     → connections, registrations and lifecycle (default).\n"
            "WARNING  → protocol violations and errors only.\n\n"
            "Example:\n"
            "  --log-level DEBUG"
        ),
    )

    return parser.parse_args()


@lru_cache
def get_configfile() -> Path | None:
    """
    Resolve the YAML configuration file.

    Priority: CLI > TLVLINK_CONFIG environment variable > ./tlvlink.yaml.
    An explicitly requested file must exist; without one, a missing
    default file means built-in defaults and environment variables only.
    """
    args = get_cli_args()
    raw = args.config or os.getenv("TLVLINK_CONFIG")

    if raw is None:
        file = Path.cwd() / "tlvlink.yaml"
        return file if file.is_file() else None

    file = Path(raw)
    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Use --config <file.yaml>\n"
            "  - Or set the TLVLINK_CONFIG environment variable\n"
            "  - Or place a 'tlvlink.yaml' file in the current working directory."
        )

    return file
