# waitfor/cli.py
# Usage examples:
#   waitfor tcp://db:5432 tcp://cache:6379
#   waitfor -t 60 udp://dns:53 unix:///var/run/docker.sock
#   DB_1_PORT=tcp://db:5432 waitfor          # discover <SERVICE>_<INDEX>_PORT variables
#   python3 -m waitfor.cli --prober nc tcp://db:5432

import argparse
import logging
import sys

from waitfor.config import PROBERS, Settings
from waitfor.engine.coordinator import Coordinator
from waitfor.log import setup_logging
from waitfor.sources import resolve_endpoints

logger = logging.getLogger("waitfor.cli")


def build_prober(settings: Settings):
    if settings.prober == "nc":
        from waitfor.prober.netcat import NetcatProber
        return NetcatProber(probe_timeout=settings.probe_timeout)
    from waitfor.prober.native import SocketProber
    return SocketProber(probe_timeout=settings.probe_timeout, udp_wait=settings.udp_wait)


def endpoint_timeout(value: str):
    endpoint, sep, seconds = value.rpartition("=")
    if not sep or not endpoint:
        raise argparse.ArgumentTypeError(f"expected ENDPOINT=SECONDS, got {value!r}")
    try:
        return endpoint, int(seconds)
    except ValueError:
        raise argparse.ArgumentTypeError(f"timeout for {endpoint} must be an integer, got {seconds!r}")


def build_argparser():
    ap = argparse.ArgumentParser(
        prog="waitfor",
        description="Block until tcp://, udp:// and unix:// endpoints accept connections",
    )
    ap.add_argument("endpoints", nargs="*", metavar="ENDPOINT",
                    help="tcp://host:port, udp://host:port or unix:///path "
                         "(default: discover <SERVICE>_<INDEX>_PORT variables)")
    ap.add_argument("-t", "--timeout", type=int, default=None,
                    help="Seconds to wait for each endpoint (default 30)")
    ap.add_argument("--endpoint-timeout", type=endpoint_timeout, action="append", default=[],
                    metavar="ENDPOINT=SECONDS", help="Override the timeout of one endpoint")
    ap.add_argument("--interval", type=float, default=None, help="Seconds between probes (default 1)")
    ap.add_argument("--probe-timeout", type=float, default=None,
                    help="Seconds a single connection attempt may take (default 2)")
    ap.add_argument("--prober", choices=PROBERS, default=None,
                    help="Use native sockets or the external nc binary")
    verbosity = ap.add_mutually_exclusive_group()
    verbosity.add_argument("-d", "--debug", action="store_true", default=None, help="Log every probe attempt")
    verbosity.add_argument("-q", "--quiet", action="store_true", default=None,
                           help="Only log errors")
    return ap


def main(argv=None, environ=None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)

    try:
        settings = Settings.from_env(
            environ,
            timeout=args.timeout,
            interval=args.interval,
            probe_timeout=args.probe_timeout,
            prober=args.prober,
            debug=args.debug,
            quiet=args.quiet,
        )
    except ValueError as e:
        ap.error(str(e))

    setup_logging(debug=settings.debug, quiet=settings.quiet)

    try:
        prober = build_prober(settings)
    except FileNotFoundError as e:
        logger.error("cannot start: %s", e)
        return 2

    endpoints = resolve_endpoints(args.endpoints, environ)
    logger.debug("endpoints: %s", endpoints or "none")

    result = Coordinator(prober, settings).wait_for_all(
        endpoints, overrides=dict(args.endpoint_timeout))
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
