from pytest import fixture

from echo_server import start_echo_server


@fixture
async def server_url(nursery):
    """Base URL of an echo server that runs for the duration of the test."""
    return await start_echo_server(nursery)
