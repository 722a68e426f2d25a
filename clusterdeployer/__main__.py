"""Main entry point for clusterdeployer."""

import argparse
import logging
import sys
from typing import Optional

from pydantic import ValidationError

from clusterdeployer.config.loader import ConfigLoadError, ConfigLoader
from clusterdeployer.config.models import DeployerConfig
from clusterdeployer.config.validator import ConfigValidator
from clusterdeployer.k8s.client import ClusterClient, ClusterClientError
from clusterdeployer.minikube.deployer import Minikube
from clusterdeployer.minikube.executor import MinikubeError
from clusterdeployer.utils.logger import level_from_verbosity, setup_logging

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="clusterdeployer",
        description="clusterdeployer - manage a local minikube development cluster",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Start a cluster with the kvm2 driver
  python -m clusterdeployer --vm-driver kvm2 create

  # Start a cluster behind a corporate proxy
  python -m clusterdeployer --proxy http://proxy.example.com:3128 create

  # Print the generated kubeconfig
  python -m clusterdeployer kubeconfig

  # Use a cluster definition file
  python -m clusterdeployer --config cluster.yaml create
        """,
    )

    parser.add_argument(
        "--config",
        type=str,
        help="YAML file containing a MinikubeCluster definition (\"-\" reads stdin)",
    )

    parser.add_argument(
        "--vm-driver",
        type=str,
        default=None,
        help="VM driver passed to minikube (overrides the config file)",
    )

    parser.add_argument(
        "--proxy",
        type=str,
        default=None,
        help="HTTP proxy forwarded to the cluster's docker daemon",
    )

    parser.add_argument(
        "--kubeconfig-path",
        type=str,
        default=None,
        help="File minikube writes the kubeconfig to (default: minikube.kubeconfig)",
    )

    parser.add_argument(
        "--minikube-path",
        type=str,
        default=None,
        help="Name or path of the minikube binary (default: minikube)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO)",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log every minikube command and its output",
    )

    parser.add_argument(
        "--log-format",
        type=str,
        default="text",
        choices=["text", "json"],
        help="Log output format (default: text)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"clusterdeployer {VERSION}",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True
    subparsers.add_parser("create", help="Start the cluster and write its kubeconfig")
    subparsers.add_parser("delete", help="Delete the cluster and remove its kubeconfig")
    subparsers.add_parser("kubeconfig", help="Print the generated kubeconfig")
    subparsers.add_parser("status", help="Check that the cluster API server answers")
    subparsers.add_parser("validate", help="Validate the effective configuration")

    return parser


def load_config(args: argparse.Namespace) -> DeployerConfig:
    """
    Resolve the effective configuration from --config and explicit flags.

    Raises:
        ConfigLoadError: If the config file cannot be read
        ValidationError: If the configuration is invalid
    """
    return ConfigLoader.resolve(
        args.config,
        overrides={
            "vm_driver": args.vm_driver,
            "proxy": args.proxy,
            "kubeconfig_path": args.kubeconfig_path,
            "executable": args.minikube_path,
        },
    )


def run_command(args: argparse.Namespace, deployer: Minikube, config: DeployerConfig) -> int:
    """
    Dispatch a parsed subcommand.

    Returns:
        Process exit code
    """
    if args.command == "validate":
        result = ConfigValidator.validate(config)
        print(result)
        return 0 if result.valid else 1

    if args.command == "create":
        for warning in ConfigValidator.validate(config).warnings:
            logger.warning(warning)
        deployer.create()
        return 0

    if args.command == "delete":
        deployer.delete()
        return 0

    if args.command == "kubeconfig":
        sys.stdout.write(deployer.get_kubeconfig())
        return 0

    if args.command == "status":
        cluster = ClusterClient(deployer.kubeconfig_path)
        if cluster.test_connection():
            print(f"Cluster '{config.metadata.name}' is reachable")
            return 0
        print(f"Cluster '{config.metadata.name}' is not reachable")
        return 1

    logger.error(f"Unknown command: {args.command}")
    return 1


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    level = level_from_verbosity(args.verbose, default=args.log_level)
    setup_logging(level=level, format_json=args.log_format == "json", stream=sys.stderr)

    try:
        config = load_config(args)
    except (ConfigLoadError, ValidationError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    deployer = Minikube.from_config(config)
    logger.debug(f"Using {deployer!r}")

    try:
        return run_command(args, deployer, config)
    except MinikubeError as e:
        logger.error(str(e))
        if e.output:
            logger.error(f"minikube output:\n{e.output}")
        return 1
    except ClusterClientError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"Could not read kubeconfig {deployer.kubeconfig_path}: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt")
        return 130


if __name__ == "__main__":
    sys.exit(main())
