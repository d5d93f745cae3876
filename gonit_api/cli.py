"""
gonit-api - command line client for the gonit daemon

Usage:
    gonit-api start NAME [-g]     - Start a process (or group with -g; NAME "all" for everything)
    gonit-api stop NAME [-g]      - Stop a process/group/all
    gonit-api restart NAME [-g]   - Restart a process/group/all
    gonit-api monitor NAME [-g]   - Monitor a process/group/all
    gonit-api unmonitor NAME [-g] - Unmonitor a process/group/all
    gonit-api status [NAME] [-g]  - Show status (defaults to all)
    gonit-api about               - Show daemon information
    gonit-api reload              - Reload daemon configuration
    gonit-api quit                - Stop the daemon
"""

import sys
import json
import logging
import argparse
from typing import List, Optional, Tuple

from gonit_api.client import RpcClient, RpcError
from gonit_api.config import ClientConfig
from gonit_api.telemetry import setup_tracer, setup_metrics

logger = logging.getLogger(__name__)

ACTIONS = ["start", "stop", "restart", "monitor", "unmonitor", "status"]
DAEMON_COMMANDS = ["about", "reload", "quit"]

# Target name meaning every process
ALL = "all"


def rpc_args(action: str, name: Optional[str] = None, is_group: bool = False) -> Tuple[str, tuple]:
    """Map a command line action to an RPC method name and its params

    Args:
        action: One of ACTIONS
        name: Process or group name; "all" targets every process
        is_group: Treat name as a process group

    Returns:
        Tuple of (method name, params)

    Raises:
        ValueError: No name given for an action that needs one
    """
    if name:
        if name == ALL:
            return f"{action}_all", ()
        kind = "group" if is_group else "process"
        return f"{action}_{kind}", (name,)

    # `status` with no target reports everything
    if action == "status":
        return "status_all", ()

    raise ValueError(f"{action} requires a process name, a group name with --group, or '{ALL}'")


def build_parser(config: ClientConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gonit-api",
        description="Control a running gonit daemon",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  gonit-api status
  gonit-api start nginx
  gonit-api stop web --group
  gonit-api --rpc-url tcp://127.0.0.1:9999 restart all
""",
    )

    parser.add_argument(
        "--rpc-url",
        default=config.rpc_url,
        help="Daemon RPC URL: tcp://host:port or a Unix socket path (default: %(default)s)",
    )
    parser.add_argument(
        "--otlp-endpoint",
        default=config.otlp_endpoint,
        help="Export traces and metrics to this OTLP receiver",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command")

    for action in ACTIONS:
        action_parser = subparsers.add_parser(action, help=f"{action.capitalize()} a process, a group or all")
        action_parser.add_argument("name", nargs="?", help=f"Process or group name, or '{ALL}'")
        action_parser.add_argument("-g", "--group", action="store_true", help="NAME is a process group")

    for command in DAEMON_COMMANDS:
        subparsers.add_parser(command, help=f"{command.capitalize()} the daemon")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    config = ClientConfig.from_env()
    parser = build_parser(config)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if not args.command:
        parser.print_help()
        return 1

    if args.command in DAEMON_COMMANDS:
        method, params = args.command, ()
    else:
        try:
            method, params = rpc_args(args.command, args.name, args.group)
        except ValueError as e:
            parser.error(str(e))

    try:
        client = RpcClient(args.rpc_url)
    except ValueError as e:
        parser.error(str(e))

    config.otlp_endpoint = args.otlp_endpoint
    if config.telemetry_enabled:
        setup_tracer(config.service_name, config.otlp_endpoint)
        setup_metrics(config.service_name, config.otlp_endpoint)

    logger.debug(f"Calling {method} with {list(params)}")

    try:
        result = client.call(method, *params)
    except RpcError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Failed to connect to gonit daemon at {client.endpoint}: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
