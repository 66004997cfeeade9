# waitfor/sources.py
import os
import re
from typing import Callable, Mapping, Optional, Sequence

# anything that yields the raw endpoint strings to wait for
EndpointSource = Callable[[], Sequence[str]]

# docker-compose style service links, e.g. DB_1_PORT=tcp://172.17.0.5:5432
SERVICE_PORT_KEY = re.compile(r"^[A-Z0-9_]+_[0-9]+_PORT$")


class StaticSource:
    """Endpoints given explicitly, e.g. on the command line."""

    def __init__(self, endpoints: Sequence[str]):
        self.endpoints = list(endpoints)

    def __call__(self) -> list:
        return list(self.endpoints)


class EnvironmentSource:
    """Endpoints discovered from <SERVICE>_<INDEX>_PORT variables, deduplicated."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None, pattern=SERVICE_PORT_KEY):
        self.environ = os.environ if environ is None else environ
        self.pattern = pattern

    def __call__(self) -> list:
        found = {value.strip() for key, value in self.environ.items()
                 if self.pattern.match(key) and value.strip()}
        return sorted(found)


def resolve_endpoints(args: Sequence[str], environ: Optional[Mapping[str, str]] = None) -> list:
    source: EndpointSource = StaticSource(args) if args else EnvironmentSource(environ)
    return source()
