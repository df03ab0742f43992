import sys

from tlvctl.bootstrap.deps import get_cli
from tlvlink.core.helpers.scan import scan


@scan("tlvctl.bootstrap.commands")
def main():
    cli = get_cli()

    try:
        if cli.interactive:
            cli.cmdloop()
        else:
            cli.onecmd(cli.args.namespace)
    finally:
        cli.close()

    if cli.failed and not cli.interactive:
        sys.exit(1)


if __name__ == "__main__":
    main()
