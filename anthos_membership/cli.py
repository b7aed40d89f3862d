import argparse
import json
import logging
import os
import sys

from anthos_membership.config import Auth, Settings
from anthos_membership.errors import MembershipError
from anthos_membership.kube import (
    delete_artifacts,
    get_membership_cr,
    get_membership_crd,
    install_exclusivity_manifests,
)
from anthos_membership.resource import ExclusivityResource

logger = logging.getLogger("anthos_membership.cli")


def _read_manifest(path):
    if not path:
        return ""
    if path == "-":
        return sys.stdin.read()
    with open(path, "r") as f:
        return f.read()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="anthos-membership",
        description="Manage the GKE Hub membership CRD and CR of a cluster",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "WARNING"),
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (overrides --log-level to DEBUG)",
    )
    parser.add_argument("--host", default=os.getenv("ANTHOS_HOST"), help="Kubernetes API endpoint")
    parser.add_argument("--token", default=os.getenv("ANTHOS_TOKEN"), help="Bearer token")
    parser.add_argument(
        "--cluster-ca-certificate",
        default=os.getenv("ANTHOS_CLUSTER_CA_CERTIFICATE"),
        help="Cluster CA certificate, PEM or base64 encoded PEM",
    )
    parser.add_argument("--insecure", action="store_true", help="Skip TLS verification")
    parser.add_argument("--kubeconfig", default=os.getenv("KUBECONFIG"), help="Path to a kubeconfig")
    parser.add_argument("--context", help="kubeconfig context to use")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("get-crd", help="Print the membership CRD as YAML")
    sub.add_parser("get-cr", help="Print the membership CR as YAML")
    install = sub.add_parser("install", help="Install or upgrade the CRD and CR")
    install.add_argument("--crd-file", help="CRD manifest file, '-' for stdin")
    install.add_argument("--cr-file", help="CR manifest file, '-' for stdin")
    sub.add_parser("delete", help="Delete the CRD and CR")
    sub.add_parser("state", help="Print both manifests as JSON")
    return parser


def run(args, auth: Auth, settings: Settings, out=None) -> None:
    out = out or sys.stdout
    if args.command == "get-crd":
        out.write(get_membership_crd(auth, settings))
    elif args.command == "get-cr":
        out.write(get_membership_cr(auth, settings))
    elif args.command == "install":
        install_exclusivity_manifests(
            auth,
            _read_manifest(args.crd_file),
            _read_manifest(args.cr_file),
            settings=settings,
        )
    elif args.command == "delete":
        delete_artifacts(auth, settings)
    elif args.command == "state":
        state = ExclusivityResource(auth, settings).read()
        out.write(json.dumps(state, indent=2) + "\n")


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "install" and args.crd_file == "-" and args.cr_file == "-":
        parser.error("--crd-file and --cr-file cannot both read stdin")

    level_name = "DEBUG" if args.debug else args.log_level.upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    auth = Auth(
        host=args.host,
        token=args.token,
        cluster_ca_certificate=args.cluster_ca_certificate,
        insecure=args.insecure,
        kubeconfig=args.kubeconfig,
        context=args.context,
    )
    logger.debug("Running %s with level %s", args.command, level_name)

    try:
        settings = Settings.from_env()
        if args.debug:
            settings.debug = True
        run(args, auth, settings)
    except (MembershipError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
