from typing import List, Optional

import typer

from fluenthttp.client import HttpRequest
from fluenthttp.configs import load_config, setup_logging
from fluenthttp.exceptions import HttpRequestError
from fluenthttp.models import HttpMethod

app = typer.Typer(help="Send HTTP requests with fluenthttp")


@app.callback()
def main() -> None:
    """fluenthttp command line client."""


def _split(value: str, sep: str, what: str) -> List[str]:
    if sep not in value:
        raise typer.BadParameter(f"{what} must look like 'name{sep}value': {value!r}")
    name, _, rest = value.partition(sep)
    return [name.strip(), rest.strip() if sep == ":" else rest]


@app.command()
def request(
    method: HttpMethod = typer.Argument(..., case_sensitive=False, help="HTTP method"),
    url: str = typer.Argument(..., help="Absolute target URI"),
    header: List[str] = typer.Option([], "--header", "-H", help="Header as 'Name: value'"),
    param: List[str] = typer.Option([], "--param", "-p", help="Query parameter as 'name=value'"),
    data: Optional[str] = typer.Option(None, "--data", "-d", help="Request body sent as UTF-8 text"),
    config: Optional[str] = typer.Option(None, "--config", help="Path to a YAML config file"),
):
    """Send one request and print the status line and body."""
    cfg = load_config(config)
    setup_logging(cfg)
    with HttpRequest.from_config(cfg) as http:
        try:
            target = http.target(url)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="URL") from exc
        for item in header:
            target.add_header(*_split(item, ":", "Header"))
        for item in param:
            target.add_parameter(*_split(item, "=", "Parameter"))
        try:
            with target.request(method, data) as response:
                typer.echo(f"{response.status_code} {response.reason or ''}".rstrip())
                body = response.get_content_as_string()
        except HttpRequestError as exc:
            typer.echo(f"Request failed: {exc}", err=True)
            raise typer.Exit(code=1) from exc
    if body:
        typer.echo(body)
    if not response.is_success:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
