"""Command line interface that sends a single HTTP request and prints the
normalized result.
"""

from __future__ import annotations

import click
import logging
import sys

from json import dumps
from typing import Optional

from .client import HttpClient
from .enums import Verb
from .errors import ClientError

__all__ = ("http_request",)


def _parse_pairs(values: tuple[str, ...], separator: str, what: str) -> dict[str, str]:
    result: dict[str, str] = {}
    for value in values:
        key, sep, rest = value.partition(separator)
        if not sep or not key.strip():
            raise click.BadParameter(
                f"expected {what} in the form NAME{separator}VALUE, got {value!r}"
            )
        result[key.strip()] = rest.strip() if separator == ":" else rest
    return result


@click.command()
@click.argument(
    "method", type=click.Choice([verb.value for verb in Verb], case_sensitive=False)
)
@click.argument("url")
@click.option(
    "-d",
    "--data",
    metavar="KEY=VALUE",
    multiple=True,
    help="a field to send in the body of the request; may be repeated",
)
@click.option(
    "-H",
    "--header",
    metavar="NAME:VALUE",
    multiple=True,
    help="an extra header to send with the request; may be repeated",
)
@click.option(
    "--json/--form",
    "use_json",
    default=False,
    help="encode the request data as JSON instead of a form",
)
@click.option(
    "--base-url",
    metavar="URL",
    default=None,
    help="the URL that relative request URLs are resolved against",
)
@click.option(
    "-t",
    "--timeout",
    type=float,
    default=10,
    help="number of seconds after which the request is abandoned",
)
@click.option("-v", "--verbose", is_flag=True, help="log the progress of the request")
def http_request(
    method: str,
    url: str,
    data: tuple[str, ...] = (),
    header: tuple[str, ...] = (),
    use_json: bool = False,
    base_url: Optional[str] = None,
    timeout: float = 10,
    verbose: bool = False,
):
    """Sends an HTTP request to the given URL and prints the status code,
    the headers and the decoded body of the response in JSON format.

    Errors are printed to the standard error stream in JSON format, and the
    exit code is 1.
    """
    from trio import run

    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    fields = _parse_pairs(data, "=", "data")
    headers = _parse_pairs(header, ":", "header")

    try:
        client = HttpClient.create(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            body_encoding="json" if use_json else "form",
        )
        result = run(client.request, url, method, fields or None)
    except ClientError as ex:
        click.echo(dumps(ex.json, indent=2), err=True)
        sys.exit(1)

    click.echo(dumps(result.json, indent=2))


if __name__ == "__main__":
    http_request()  # type: ignore
