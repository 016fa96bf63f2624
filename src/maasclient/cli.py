# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""The `maas-client` command: make signed requests to a MAAS server."""

import argparse
import json
import logging
import sys

from maasclient.config import Settings
from maasclient.dispatch import MAASDispatcher
from maasclient.errors import MAASClientError
from maasclient.logging import configure_logging, get_logger
from maasclient.maas_client import HTTPVerb, MAASClient

logger = get_logger(__name__)


def json_value(string):
    """Parse a JSON command-line argument."""
    try:
        return json.loads(string)
    except ValueError as error:
        raise argparse.ArgumentTypeError(f"invalid JSON: {error}")


def run_verb(client, options):
    result = client.request(
        options.verb,
        options.endpoint,
        body=getattr(options, "data", None),
        timeout=options.timeout,
    )
    print(json.dumps(result, indent=2, sort_keys=True))


def run_machines(client, options):
    for machine in client.list_machines(timeout=options.timeout):
        print(machine.summary())


def prepare_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="maas-client",
        description=__doc__,
        epilog=(
            "Defaults are read from MAAS_URL, MAAS_API_KEY, "
            "MAAS_API_VERSION, MAAS_TIMEOUT and MAAS_DEBUG."
        ),
    )
    parser.add_argument(
        "--url",
        default=settings.url,
        required=settings.url is None,
        help="The MAAS URL, e.g. http://localhost:5240/MAAS/",
    )
    parser.add_argument(
        "--api-key",
        default=settings.api_key,
        required=settings.api_key is None,
        help="The API key, as consumer-key:token-key:token-secret.",
    )
    parser.add_argument("--api-version", default=settings.api_version)
    parser.add_argument(
        "--timeout",
        type=float,
        default=settings.timeout,
        help="Give up on a request after this many seconds.",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        default=settings.debug,
        help="Log requests and responses.",
    )
    subparsers = parser.add_subparsers(
        title="commands", dest="command", required=True
    )
    for verb in HTTPVerb:
        sub = subparsers.add_parser(
            verb.value.lower(), help=f"Issue a {verb.value} request."
        )
        sub.add_argument("endpoint", help="E.g. machines/")
        if verb.accepts_body:
            sub.add_argument(
                "--data", type=json_value, help="A JSON request body."
            )
        sub.set_defaults(execute=run_verb, verb=verb)
    sub = subparsers.add_parser("machines", help="List the machines.")
    sub.set_defaults(execute=run_machines)
    return parser


def main(argv=None, environ=None):
    try:
        settings = (
            Settings.from_environ()
            if environ is None
            else Settings.from_environ(environ)
        )
    except ValueError as error:
        prepare_parser(Settings()).error(str(error))
    parser = prepare_parser(settings)
    options = parser.parse_args(argv)
    configure_logging(
        logging.DEBUG if options.debug else logging.WARNING, stream=sys.stderr
    )
    try:
        with MAASDispatcher() as dispatcher:
            client = MAASClient(
                options.url, options.api_key, options.api_version, dispatcher
            )
            options.execute(client, options)
    except MAASClientError as error:
        logger.debug("Request failed", exc_info=error)
        print(error, file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
