"""CLI entry point for the marine bulletin reformatter."""

import argparse
import logging
import sys

import uvicorn

from metmar.config.loader import load_config
from metmar.config.schema import MetmarConfig, ServerConfig
from metmar.models.errors import MetmarError
from metmar.server import build_fetcher, create_app, create_gale_app

DEFAULT_CONFIG = "ops/configs/default.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="metmar",
        description="Reformat marine weather bulletins and plot gale warnings",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )

    sub = parser.add_subparsers(dest="command")

    # serve
    serve_p = sub.add_parser(
        "serve", help="Reformat forecasts and serve them over HTTP"
    )
    _add_server_flags(serve_p)

    # gale
    gale_p = sub.add_parser(
        "gale", help="Display gale warning number vs day in the year"
    )
    gale_p.add_argument(
        "forecastdir", help="Directory containing saved weather forecasts"
    )
    _add_server_flags(gale_p)

    # parse
    parse_p = sub.add_parser(
        "parse", help="Fetch and parse current forecast, for debugging purpose"
    )
    parse_p.add_argument("id", help="Forecast identifier")

    # config show
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    if args.command in ("serve", "gale"):
        try:
            config = _with_server_overrides(config, args.http, args.prefix)
        except ValueError as e:
            parser.error(str(e))

    try:
        if args.command == "serve":
            return _cmd_serve(config)
        elif args.command == "gale":
            return _cmd_gale(config, args)
        elif args.command == "parse":
            return _cmd_parse(config, args)
        elif args.command == "config":
            return _cmd_config(config, args)
    except MetmarError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    parser.print_help()
    return 1


def _add_server_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("--http", help="HTTP host:port, e.g. :5000")
    p.add_argument("--prefix", help="Public URL prefix")


def parse_http_address(addr: str) -> tuple[str, int]:
    """Split a host:port address; an empty host means every interface."""
    host, sep, port = addr.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"invalid HTTP address: {addr!r}")
    return host or "0.0.0.0", int(port)


def _with_server_overrides(
    config: MetmarConfig, http: str | None, prefix: str | None
) -> MetmarConfig:
    updates: dict = {}
    if http:
        updates["host"], updates["port"] = parse_http_address(http)
    if prefix is not None:
        updates["prefix"] = prefix.rstrip("/")
    if not updates:
        return config
    # ServerConfig validates the prefix pattern
    server = ServerConfig(**{**config.server.model_dump(), **updates})
    return config.model_copy(update={"server": server})


def _cmd_serve(config: MetmarConfig) -> int:
    app = create_app(config)
    print(f"serving on {config.server.host}:{config.server.port}")
    uvicorn.run(app, host=config.server.host, port=config.server.port)
    return 0


def _cmd_gale(config: MetmarConfig, args) -> int:
    gale = config.gale.model_copy(update={"forecast_dir": args.forecastdir})
    config = config.model_copy(update={"gale": gale})
    app = create_gale_app(config)
    print(f"serving on {config.server.host}:{config.server.port}")
    uvicorn.run(app, host=config.server.host, port=config.server.port)
    return 0


def _cmd_parse(config: MetmarConfig, args) -> int:
    forecast = build_fetcher(config).fetch_one(args.id)
    print(forecast.content)
    return 0


def _cmd_config(config: MetmarConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    print("Use: config show")
    return 1
