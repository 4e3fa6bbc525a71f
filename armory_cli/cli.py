"""Command line surface for the Armory RPC core."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Sequence

from armory_core.framework import Framework
from armory_core.rpc import InvalidArgumentsError, RpcService, UnknownCommandError
from armory_core.settings import RpcSettings
from armory_core.version import FRAMEWORK_VERSION


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="armory",
        description="Armory administrative control surface for the framework runtime.",
    )
    parser.add_argument("--version", action="version", version=f"armory v{FRAMEWORK_VERSION}")
    parser.add_argument(
        "--workspace-dir",
        "-w",
        dest="workspace_dir",
        default=None,
        help="Directory to start the .armory workspace lookup from (default: current folder)",
    )
    parser.add_argument("--log-level", dest="log_level", default=None, help="logging level")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = False

    call = subparsers.add_parser("call", help="run one RPC command in-process")
    call.add_argument("method", help="command name, e.g. core.module_stats or getg")
    call.add_argument("params", nargs="*", help="positional command arguments")
    call.set_defaults(func=_handle_call)

    commands = subparsers.add_parser("commands", help="list registered RPC commands")
    commands.add_argument("--format", choices=["text", "json"], default="text")
    commands.set_defaults(func=_handle_commands)

    status = subparsers.add_parser("status", help="show workspace, module paths and counts")
    status.add_argument("--modules", action="store_true", help="list every loaded module")
    status.add_argument(
        "--module",
        dest="module",
        default=None,
        help="show one module, e.g. exploits/multi/handler",
    )
    status.set_defaults(func=_handle_status)

    serve = subparsers.add_parser("serve", help="serve RPC commands over HTTP")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", default=None)
    serve.add_argument("--env-file", dest="env_file", default=None, help="Path to .env")
    serve.set_defaults(func=_handle_serve)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 0
    return func(args)


def _configure_logging(level: str | None) -> None:
    name = (level or "info").upper()
    logging.basicConfig(level=getattr(logging, name, logging.INFO))


def _start_dir(args: argparse.Namespace) -> Path | None:
    return Path(args.workspace_dir) if args.workspace_dir else None


def _service(args: argparse.Namespace) -> RpcService:
    framework = Framework(start_dir=_start_dir(args))
    framework.bootstrap()
    return RpcService(framework)


def _handle_call(args: argparse.Namespace) -> int:
    _configure_logging(args.log_level or "warning")
    service = _service(args)
    try:
        result = service.call(args.method, *args.params)
    except UnknownCommandError as exc:
        print(f"[armory:rpc] error: {exc}")
        return 2
    except InvalidArgumentsError as exc:
        print(f"[armory:rpc] invalid arguments: {exc}")
        return 2
    finally:
        service.framework.shutdown(timeout=1.0)
    print(json.dumps(dict(result), indent=2, ensure_ascii=False, sort_keys=True))
    return 0


def _handle_commands(args: argparse.Namespace) -> int:
    service = _service(args)
    specs = service.registry.specs()
    if args.format == "json":
        payload = [
            {
                "name": spec.qualified_name,
                "params": [{"name": param.name, "type": param.type.value} for param in spec.params],
                "description": spec.description,
            }
            for spec in specs
        ]
        print(json.dumps(payload, indent=2))
        return 0

    for spec in specs:
        signature = ", ".join(f"{param.name}:{param.type.value}" for param in spec.params)
        display = f"{spec.qualified_name}({signature})"
        print(f"  {display:<36} {spec.description}")
    return 0


def _handle_status(args: argparse.Namespace) -> int:
    framework = Framework(start_dir=_start_dir(args))
    status = framework.bootstrap()
    print(f"[armory] workspace: {status.workspace.root}")
    for path in status.module_paths:
        print(f"[armory] module path: {path}")
    counts = " ".join(f"{key}={value}" for key, value in status.module_counts.items())
    print(f"[armory] modules: {counts}")
    for name in status.failed_modules:
        print(f"[armory] failed: {name}")
    if args.modules:
        for entry in framework.modules.entries():
            print(f"[armory] module: {entry.full_name} ({entry.name})")
    if args.module:
        entry = framework.modules.get(args.module)
        if entry is None:
            print(f"[armory] error: module '{args.module}' not loaded")
            return 1
        print(f"[armory] module: {entry.full_name}")
        print(f"  name: {entry.name}")
        print(f"  description: {entry.description}")
        print(f"  file: {entry.file}")
    return 0


def _handle_serve(args: argparse.Namespace) -> int:
    from armory_core.server import serve

    overrides = {
        "rpc_host": args.host,
        "rpc_port": args.port,
        "log_level": args.log_level,
    }
    settings = RpcSettings.resolve(
        start_dir=_start_dir(args),
        overrides={key: value for key, value in overrides.items() if value},
        env_file=args.env_file,
    )
    _configure_logging(settings.log_level)
    service = _service(args)
    print(f"[armory] serving RPC on http://{settings.host}:{settings.port}")
    serve(service, settings)
    return 0
