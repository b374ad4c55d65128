"""Run the mock proof server: python -m mock_server [--host HOST] [--port PORT]"""

import click
import uvicorn


@click.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8080, show_default=True, type=int)
def main(host: str, port: int) -> None:
    """Serve the simulated proof service."""
    uvicorn.run("mock_server.main:app", host=host, port=port)


if __name__ == "__main__":
    main()
