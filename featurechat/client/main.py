"""
Command-line entry point.

Builds one server and one client on an in-process network with the chosen
features, then sends every line read from stdin and prints what the client
displays in response.
"""
import argparse
import logging
import sys

from ..common.crypto import METHODS
from ..common.errors import ChatError, ConfigurationError
from ..common.protocol import Network
from ..config import ChatConfig, build_client, build_factory, build_server
from .ui import COLORS


def credential(value: str):
    ''' argparse type for NAME:PASSWORD pairs '''
    username, sep, password = value.partition(":")
    if not sep or not username:
        raise argparse.ArgumentTypeError(f"expected NAME:PASSWORD, got {value!r}")
    return username, password


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="featurechat", description="Simulated chat with stackable features")
    ap.add_argument("--authentication", action="store_true", help="Require clients to authenticate")
    ap.add_argument("--color", action="store_true", help="Allow colored messages")
    ap.add_argument("--encryption", choices=sorted(METHODS), default=None, help="Message obfuscation")
    ap.add_argument("--logging", action="store_true", help="Log inbound messages on server and client")
    ap.add_argument("--user", type=credential, action="append", default=[], metavar="NAME:PASSWORD",
                    help="Register a user with the server (repeatable)")
    ap.add_argument("--login", type=credential, default=None, metavar="NAME:PASSWORD",
                    help="Credentials the client authenticates with")
    ap.add_argument("--text-color", choices=sorted(COLORS), default=None, help="Color for sent lines")
    ap.add_argument("--verbose", action="store_true", help="Show debug output")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    config = ChatConfig.from_args(args)
    network = Network()
    factory = build_factory(config)
    server = build_server(config, network, dict(args.user), factory=factory)
    client = build_client(config, network, factory=factory)
    network.register(server)
    network.register(client)

    color = COLORS[args.text_color] if args.text_color else None
    try:
        client.connect(server.address)
        if args.login:
            client.authenticate(*args.login)
            print(client.view.last_displayed_message or f"[{client.address}] Authentication sent.")
        for line in sys.stdin:
            line = line.rstrip("\n")
            if not line:
                continue
            client.send(line, color)
            print(client.view.last_displayed_message)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except ChatError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
