# tools/probe_test.py
# Usage: python3 -m tools.probe_test tcp://127.0.0.1:5432 [socket|nc]
import sys
import json
from dataclasses import asdict

from waitfor.cli import build_prober
from waitfor.config import Settings
from waitfor.parser import parse


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print("Usage: python3 -m tools.probe_test <endpoint> [socket|nc]")
        return 2
    endpoint = parse(argv[0])
    prober = build_prober(Settings(prober=argv[1] if len(argv) > 1 else "socket"))
    outcome = prober.probe_once(endpoint)
    print(json.dumps({
        "endpoint": endpoint.raw,
        "protocol": endpoint.protocol.value,
        "target": endpoint.target,
        **asdict(outcome),
    }, indent=2))
    return 0 if outcome.status == "open" else 1


if __name__ == "__main__":
    sys.exit(main())
